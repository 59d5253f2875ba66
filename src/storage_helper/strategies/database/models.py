"""SQLAlchemy models for the embedded-database backend."""

from sqlalchemy import Column, LargeBinary, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class StorageObject(Base):
    """One stored item: an encoded payload under a unique key."""

    __tablename__ = "storage_objects"

    key = Column(String, primary_key=True)
    data = Column(LargeBinary, nullable=True)

    def __repr__(self) -> str:
        size = len(self.data) if self.data is not None else 0
        return f"StorageObject(key={self.key!r}, {size} bytes)"


__all__ = ["Base", "StorageObject"]
