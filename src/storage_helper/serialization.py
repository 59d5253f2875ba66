"""Encoding of caller values to opaque bytes and back."""

import math
from typing import Any, Type, TypeVar

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .exceptions import DecodingFailedError, EncodingFailedError

T = TypeVar("T")

_ANY_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


def _has_non_finite(value: Any) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite(v) for v in value.values())
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(_has_non_finite(v) for v in value)
    return False


class JSONCodec:
    """
    JSON codec backed by pydantic type adapters.

    Any value pydantic can serialize (models, dataclasses, TypedDicts and
    builtins) is encoded to UTF-8 JSON bytes. Decoding validates the bytes
    against the requested type in strict mode, so ``"5"`` never becomes ``5``.
    """

    def encode(self, item: Any) -> bytes:
        """
        Encode an item to bytes.

        Raises:
            EncodingFailedError: If the item's type graph cannot be serialized
                or contains NaN or infinite floats, which JSON cannot represent
        """
        try:
            data = _ANY_ADAPTER.dump_json(item)
        except PydanticSerializationError as exc:
            raise EncodingFailedError(
                details={"item_type": type(item).__name__}, cause=exc
            ) from exc

        # dump_json writes NaN and infinity as null
        if _has_non_finite(_ANY_ADAPTER.dump_python(item)):
            raise EncodingFailedError(
                "Cannot encode non-finite float values.",
                details={"item_type": type(item).__name__},
            )
        return data

    def decode(self, data: bytes, item_type: Type[T]) -> T:
        """
        Decode bytes into an instance of ``item_type``.

        Raises:
            DecodingFailedError: If the data does not match ``item_type``
        """
        try:
            adapter: TypeAdapter[T] = TypeAdapter(item_type)
        except PydanticSchemaGenerationError as exc:
            raise DecodingFailedError(
                details={"item_type": getattr(item_type, "__name__", str(item_type))},
                cause=exc,
            ) from exc
        try:
            return adapter.validate_json(data, strict=True)
        except ValidationError as exc:
            raise DecodingFailedError(
                details={"item_type": getattr(item_type, "__name__", str(item_type))},
                cause=exc,
            ) from exc


default_codec = JSONCodec()

__all__ = ["JSONCodec", "default_codec"]
