"""Embedded-database backend."""

from .models import Base, StorageObject
from .strategy import DatabaseStrategy

__all__ = ["Base", "StorageObject", "DatabaseStrategy"]
