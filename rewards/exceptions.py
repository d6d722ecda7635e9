"""
Error taxonomy for the reward network.

Every failure the reward pipeline reports to its callers is one of the
classes below. Repository and database errors are translated into this
hierarchy at the persistence boundary, so callers never need to know which
store backs the service.
"""


class RewardNetworkError(Exception):
    """Base exception for the reward network"""
    pass


class NotFound(RewardNetworkError):
    """Raised when a looked-up entity does not exist. Never retried."""
    pass


class RestaurantNotFound(NotFound):
    """Raised when no restaurant is registered for a merchant number"""

    def __init__(self, merchant_number: str):
        self.merchant_number = merchant_number
        super().__init__(f"No restaurant with merchant number '{merchant_number}'")


class AccountNotFound(NotFound):
    """Raised when no account matches a credit card or account number"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"No account found for '{key}'")


class RewardNotFound(NotFound):
    """Raised when no reward confirmation exists for a transaction"""

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"No reward recorded for transaction '{transaction_id}'")


class PolicyViolation(RewardNetworkError):
    """
    Raised when a restaurant's benefit policy excludes a dining.

    This is a valid zero-reward outcome, not an error for the caller of
    the reward network.
    """
    pass


class InvalidAllocation(RewardNetworkError):
    """Raised when an account's beneficiary allocations are corrupt"""
    pass


class ConcurrentModification(RewardNetworkError):
    """Raised when an account changed between load and save. Transient."""

    def __init__(self, account_number: str, expected_version: int | None = None):
        self.account_number = account_number
        self.expected_version = expected_version
        super().__init__(
            f"Account '{account_number}' was modified concurrently "
            f"(expected version {expected_version})"
        )


class PersistenceFailure(RewardNetworkError):
    """Raised when a write could not be committed. Nothing was applied."""
    pass


class DuplicateTransaction(PersistenceFailure):
    """Raised when a reward for the same transaction id is already stored"""

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(f"Reward for transaction '{transaction_id}' already exists")
