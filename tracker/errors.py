"""Exceptions raised by the finance tracker."""


class TrackerError(Exception):
    """Base exception for tracker errors"""
    pass


class TransactionNotFoundError(TrackerError, KeyError):
    """No transaction with the requested id"""

    def __init__(self, tx_id: str):
        super().__init__(tx_id)
        self.tx_id = tx_id

    def __str__(self) -> str:
        return f"Transaction with ID {self.tx_id} does not exist"


class InvalidTransactionError(TrackerError, ValueError):
    """Submitted record failed validation"""

    def __init__(self, details: dict):
        super().__init__(details.get("message", "invalid transaction"))
        self.details = details


class StorageError(TrackerError):
    """Stored data could not be decoded"""
    pass


class ConfigurationError(TrackerError):
    """Invalid environment configuration"""
    pass
