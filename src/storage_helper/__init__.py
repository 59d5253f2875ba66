"""
Storage Helper: one save/fetch/delete interface over pluggable backends.

Pick a backend when constructing a StorageManager:

- PreferencesStorage: flat key-value preference store (in memory or JSON file)
- DatabaseStorage: embedded SQLAlchemy database with bulk delete and reset
- CustomStorage: any object implementing StorageStrategy
"""

__version__ = "0.1.0"

from .config import DatabaseConfig, LoggingConfig, PreferencesConfig, StorageSettings
from .exceptions import (
    ConcurrencyError,
    DatabaseError,
    DatabaseInitializationError,
    DataNotFoundError,
    DecodingFailedError,
    DeleteFailedError,
    EncodingFailedError,
    FetchFailedError,
    GeneralStorageError,
    InsufficientStorageError,
    InvalidKeyError,
    InvalidQueryError,
    ManagerInitializationError,
    MigrationRequiredError,
    ObjectNotFoundError,
    PermissionDeniedError,
    PreferencesError,
    SaveFailedError,
    SchemaValidationError,
    StorageError,
    StorageManagerError,
    StrategyNotInitializedError,
    TransactionFailedError,
    UnexpectedStorageError,
    UnsupportedStorageTypeError,
)
from .logging import StorageLogger, get_logger, setup_logging
from .manager import StorageManager
from .serialization import JSONCodec
from .storage_type import CustomStorage, DatabaseStorage, PreferencesStorage, StorageType
from .strategies import (
    DatabaseSpecificStrategy,
    DatabaseStrategy,
    InMemoryPreferenceStore,
    JSONFilePreferenceStore,
    PreferenceStore,
    PreferencesStrategy,
    StorageObject,
    StorageStrategy,
)

__all__ = [
    "StorageManager",
    "StorageType",
    "PreferencesStorage",
    "DatabaseStorage",
    "CustomStorage",
    "StorageStrategy",
    "DatabaseSpecificStrategy",
    "PreferencesStrategy",
    "DatabaseStrategy",
    "StorageObject",
    "PreferenceStore",
    "InMemoryPreferenceStore",
    "JSONFilePreferenceStore",
    "JSONCodec",
    "StorageSettings",
    "DatabaseConfig",
    "PreferencesConfig",
    "LoggingConfig",
    "StorageLogger",
    "get_logger",
    "setup_logging",
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
