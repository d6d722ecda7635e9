"""
Tests for the application entry point.

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import importlib
import tomllib
from pathlib import Path
from unittest.mock import patch

from rewards.main import run


class TestEntryPoint:
    def test_console_script_targets_run(self):
        """
        Arrange: pyproject.toml at the repository root
        Act: Resolve the reward-network console script
        Assert: It names rewards.main.run
        """
        # Arrange
        pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"

        # Act
        target = tomllib.loads(pyproject.read_text())["project"]["scripts"]["reward-network"]
        module_name, function_name = target.split(":")

        # Assert
        assert getattr(importlib.import_module(module_name), function_name) is run

    @patch("uvicorn.run")
    def test_run_serves_the_app(self, mock_run):
        run()

        mock_run.assert_called_once_with("rewards.main:app", host="0.0.0.0", port=8000)
