"""
Storage exception hierarchy.

Every error raised by the storage manager and its strategies derives from
``StorageError``. Errors are grouped by concern:

- GeneralStorageError: encoding, decoding and key problems shared by backends
- StorageManagerError: facade construction and dispatch failures
- PreferencesError: preference-store backend failures
- DatabaseError: embedded-database backend failures
"""

from typing import Any, Dict, Optional


class StorageError(Exception):
    """Base exception for all storage errors."""

    default_message = "A storage error occurred."

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.error_code = error_code or self.__class__.__name__.upper()
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "cause": repr(self.cause) if self.cause is not None else None,
        }

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}'"
            f")"
        )


# General errors


class GeneralStorageError(StorageError):
    """Errors that can occur across different storage strategies."""


class EncodingFailedError(GeneralStorageError):
    """Raised when an item cannot be encoded."""

    default_message = "Failed to encode data."


class DecodingFailedError(GeneralStorageError):
    """Raised when stored data does not match the requested type."""

    default_message = "Failed to decode data."


class InvalidKeyError(GeneralStorageError):
    """Raised when an invalid key is used."""

    default_message = "The provided key is invalid."


class InsufficientStorageError(GeneralStorageError):
    """Raised when there's insufficient storage space."""

    default_message = "Insufficient storage space available."


class PermissionDeniedError(GeneralStorageError):
    """Raised when the operation is not permitted."""

    default_message = "Permission denied for the requested operation."


class UnexpectedStorageError(GeneralStorageError):
    """Raised for unexpected errors not covered by other cases."""

    def __init__(self, cause: BaseException, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"An unexpected error occurred: {cause}", details=details, cause=cause
        )


# Manager errors


class StorageManagerError(StorageError):
    """Errors raised by the storage manager itself."""


class ManagerInitializationError(StorageManagerError):
    """Raised when the storage manager fails to build its strategy."""

    default_message = "Failed to initialize the storage manager."


class StrategyNotInitializedError(StorageManagerError):
    """Raised when an operation is invoked without an active strategy."""

    default_message = "Storage strategy is not initialized."


class UnsupportedStorageTypeError(StorageManagerError):
    """Raised when an unsupported storage type is used."""

    default_message = "Unsupported storage type."


class ConcurrencyError(StorageManagerError):
    """Raised when a concurrency-related error occurs."""

    default_message = "A concurrency error occurred."


# Preference-store errors


class PreferencesError(StorageError):
    """Errors specific to the preference-store backend."""


class SaveFailedError(PreferencesError):
    """Raised when saving to the preference store fails."""

    default_message = "Failed to save item to the preference store."


class FetchFailedError(PreferencesError):
    """Raised when reading from the preference store fails."""

    default_message = "Failed to fetch item from the preference store."


class DeleteFailedError(PreferencesError):
    """Raised when deleting from the preference store fails."""

    default_message = "Failed to delete item from the preference store."


class DataNotFoundError(PreferencesError, LookupError):
    """Raised when no data exists for a key in the preference store."""

    default_message = "Data not found in the preference store."


# Database errors


class DatabaseError(StorageError):
    """Errors specific to the embedded-database backend."""


class DatabaseInitializationError(DatabaseError):
    """Raised when the database engine cannot be created."""

    default_message = "Failed to initialize the database."


class TransactionFailedError(DatabaseError):
    """Raised when a database transaction fails."""

    default_message = "Database transaction failed."


class MigrationRequiredError(DatabaseError):
    """Raised when the database schema is missing and must be migrated."""

    default_message = "Database migration is required."


class SchemaValidationError(DatabaseError):
    """Raised when the existing database schema does not match."""

    default_message = "Database schema validation failed."


class ObjectNotFoundError(DatabaseError, LookupError):
    """Raised when no record exists for a key."""

    default_message = "Database object not found."


class InvalidQueryError(DatabaseError):
    """Raised when a delete predicate is not a valid filter expression."""

    default_message = "Invalid database query."


__all__ = [
    "StorageError",
    "GeneralStorageError",
    "EncodingFailedError",
    "DecodingFailedError",
    "InvalidKeyError",
    "InsufficientStorageError",
    "PermissionDeniedError",
    "UnexpectedStorageError",
    "StorageManagerError",
    "ManagerInitializationError",
    "StrategyNotInitializedError",
    "UnsupportedStorageTypeError",
    "ConcurrencyError",
    "PreferencesError",
    "SaveFailedError",
    "FetchFailedError",
    "DeleteFailedError",
    "DataNotFoundError",
    "DatabaseError",
    "DatabaseInitializationError",
    "TransactionFailedError",
    "MigrationRequiredError",
    "SchemaValidationError",
    "ObjectNotFoundError",
    "InvalidQueryError",
]
