"""HTTP middleware"""

from rewards.middleware.logging import LoggingMiddleware
from rewards.middleware.request_id import RequestIDMiddleware

__all__ = ["LoggingMiddleware", "RequestIDMiddleware"]
