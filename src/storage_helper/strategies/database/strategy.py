"""Storage strategy backed by an embedded SQLAlchemy database."""

from typing import Any, Dict, Iterable, Optional, Type, TypeVar

from sqlalchemy import create_engine, delete, inspect
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ...config.settings import DatabaseConfig
from ...exceptions import (
    DatabaseError,
    DatabaseInitializationError,
    DecodingFailedError,
    InvalidQueryError,
    MigrationRequiredError,
    ObjectNotFoundError,
    SchemaValidationError,
    TransactionFailedError,
)
from ...logging import StorageLogger
from ...serialization import JSONCodec, default_codec
from ..base import DatabaseSpecificStrategy, StorageStrategy
from .models import Base, StorageObject

T = TypeVar("T")


def _redact_url(url: str) -> str:
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return "<unparseable url>"


class DatabaseStrategy(StorageStrategy, DatabaseSpecificStrategy):
    """
    Persists items as ``StorageObject`` rows through SQLAlchemy.

    Every mutation runs in its own transaction. Besides the basic storage
    contract this strategy supports bulk deletes by key list or by filter
    expression, and a full reset.

    Example:
        strategy = DatabaseStrategy(DatabaseConfig(url="sqlite:///storage.db"))
        strategy.save(user, "user:1")
        strategy.delete_where(StorageObject.key.startswith("user:"))
    """

    def __init__(
        self,
        config: Optional[DatabaseConfig] = None,
        codec: Optional[JSONCodec] = None,
        logger: Optional[StorageLogger] = None,
    ):
        self.config = config or DatabaseConfig()
        self.codec = codec or default_codec
        self.logger = (logger or StorageLogger.shared()).bind(
            component="database_strategy"
        )

        try:
            self.engine = create_engine(self.config.url, **self._engine_kwargs())
        except Exception as exc:
            url = _redact_url(self.config.url)
            self.logger.error("Database initialization failed", url=url, error=str(exc))
            raise DatabaseInitializationError(details={"url": url}, cause=exc) from exc

        try:
            if self.config.create_schema:
                Base.metadata.create_all(self.engine)
            else:
                self._validate_schema()
        except DatabaseError as exc:
            self.engine.dispose()
            self.logger.error("Database schema check failed", error=str(exc))
            raise
        except Exception as exc:
            self.engine.dispose()
            self.logger.error("Database initialization failed", error=str(exc))
            raise DatabaseInitializationError(
                details={"url": self.safe_url}, cause=exc
            ) from exc

        self.session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )
        self.logger.info("Database initialized", url=self.safe_url)

    @property
    def safe_url(self) -> str:
        return self.engine.url.render_as_string(hide_password=True)

    def _engine_kwargs(self) -> Dict[str, Any]:
        engine_kwargs: Dict[str, Any] = {"echo": self.config.echo}
        if self.config.is_sqlite:
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if self.config.is_in_memory:
                engine_kwargs["poolclass"] = StaticPool
        engine_kwargs.update(self.config.engine_options)
        return engine_kwargs

    def _validate_schema(self) -> None:
        inspector = inspect(self.engine)
        table = StorageObject.__table__
        if not inspector.has_table(table.name):
            raise MigrationRequiredError(details={"table": table.name})

        existing = {column["name"] for column in inspector.get_columns(table.name)}
        missing = sorted(set(table.columns.keys()) - existing)
        if missing:
            raise SchemaValidationError(
                details={"table": table.name, "missing_columns": missing}
            )

    def save(self, item: Any, key: str) -> None:
        """
        Save an item, replacing any record with the same key.

        Raises:
            TransactionFailedError: If encoding or the write transaction fails
        """
        try:
            data = self.codec.encode(item)
            with self.session_factory.begin() as session:
                session.merge(StorageObject(key=key, data=data))
        except Exception as exc:
            self.logger.error("Failed to save item", key=key, error=str(exc))
            raise TransactionFailedError(details={"key": key}, cause=exc) from exc
        self.logger.info("Successfully saved item", key=key)

    def fetch(self, key: str, item_type: Type[T]) -> T:
        """
        Fetch the item stored under a key.

        Raises:
            ObjectNotFoundError: If no record exists or its payload is empty
            DecodingFailedError: If the payload does not match ``item_type``
            TransactionFailedError: If the record cannot be read
        """
        try:
            with self.session_factory() as session:
                record = session.get(StorageObject, key)
                data = record.data if record is not None else None
        except SQLAlchemyError as exc:
            self.logger.error("Failed to read item", key=key, error=str(exc))
            raise TransactionFailedError(details={"key": key}, cause=exc) from exc

        if record is None:
            self.logger.warning("No object found", key=key)
            raise ObjectNotFoundError(details={"key": key})
        if not data:
            self.logger.error("No data found", key=key)
            raise ObjectNotFoundError(details={"key": key})

        try:
            item = self.codec.decode(data, item_type)
        except DecodingFailedError as exc:
            self.logger.error("Failed to decode item", key=key, error=str(exc.cause))
            raise
        self.logger.info("Successfully fetched item", key=key)
        return item

    def delete(self, key: str) -> None:
        """
        Delete the record stored under a key. A missing record is not an error.

        Raises:
            TransactionFailedError: If the delete transaction fails
        """
        try:
            with self.session_factory.begin() as session:
                record = session.get(StorageObject, key)
                if record is not None:
                    session.delete(record)
        except SQLAlchemyError as exc:
            self.logger.error("Failed to delete item", key=key, error=str(exc))
            raise TransactionFailedError(details={"key": key}, cause=exc) from exc

        if record is None:
            self.logger.warning("No object found to delete", key=key)
            return
        self.logger.info("Successfully deleted item", key=key)

    def delete_where(self, predicate: Any) -> int:
        """
        Delete every record matching a SQLAlchemy filter expression.

        Args:
            predicate: Boolean expression over ``StorageObject`` columns,
                e.g. ``StorageObject.key.like("session:%")``

        Returns:
            Number of deleted records

        Raises:
            InvalidQueryError: If ``predicate`` is not a filter expression
            TransactionFailedError: If the delete transaction fails
        """
        if predicate is None:
            self.logger.error("Invalid delete predicate", error="predicate is None")
            raise InvalidQueryError(details={"predicate": None})
        try:
            statement = delete(StorageObject).where(predicate)
        except ArgumentError as exc:
            self.logger.error("Invalid delete predicate", error=str(exc))
            raise InvalidQueryError(details={"predicate": repr(predicate)}, cause=exc) from exc

        try:
            count = self._execute_delete(statement)
        except SQLAlchemyError as exc:
            self.logger.error("Failed to delete items matching predicate", error=str(exc))
            raise TransactionFailedError(cause=exc) from exc
        self.logger.info("Successfully deleted items matching predicate", count=count)
        return count

    def delete_multiple(self, keys: Iterable[str]) -> int:
        """
        Delete every record whose key is in ``keys``.

        Returns:
            Number of deleted records

        Raises:
            TransactionFailedError: If the delete transaction fails
        """
        keys = list(keys)
        statement = delete(StorageObject).where(StorageObject.key.in_(keys))
        try:
            count = self._execute_delete(statement)
        except SQLAlchemyError as exc:
            self.logger.error("Failed to delete multiple items", error=str(exc))
            raise TransactionFailedError(details={"keys": keys}, cause=exc) from exc
        self.logger.info("Successfully deleted multiple items", count=count)
        return count

    def reset(self) -> None:
        """
        Delete every stored record.

        Raises:
            TransactionFailedError: If the delete transaction fails
        """
        try:
            count = self._execute_delete(delete(StorageObject))
        except SQLAlchemyError as exc:
            self.logger.error("Failed to reset database", error=str(exc))
            raise TransactionFailedError(cause=exc) from exc
        self.logger.info("Successfully reset database", count=count)

    def _execute_delete(self, statement: Any) -> int:
        with self.session_factory.begin() as session:
            result = session.execute(
                statement, execution_options={"synchronize_session": False}
            )
            return result.rowcount

    def close(self) -> None:
        """Dispose of the engine and its connections."""
        self.engine.dispose()
        self.logger.info("Database closed", url=self.safe_url)

    def __repr__(self) -> str:
        return f"DatabaseStrategy({self.safe_url!r})"


__all__ = ["DatabaseStrategy"]
