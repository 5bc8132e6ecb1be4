"""
Unsigned integer types.

Slots, epochs, balances and validator indices are all uint64 on the beacon
chain. Keeping them as an `int` subclass lets them flow through arithmetic
unchanged while pydantic enforces the range at record boundaries.
"""

from __future__ import annotations

from typing import Any, ClassVar, SupportsInt

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self


class BaseUint(int):
    """An `int` confined to `[0, 2**BITS)`."""

    BITS: ClassVar[int]
    """Width in bits; set by each concrete type."""

    def __new__(cls, value: SupportsInt) -> Self:
        """
        Raises:
            TypeError: For booleans, which are never accepted as integers here.
            OverflowError: If the value does not fit in `BITS` bits.
        """
        if isinstance(value, bool):
            raise TypeError(f"{cls.__name__} cannot be built from a bool")
        number = int(value)
        if number < 0 or number.bit_length() > cls.BITS:
            raise OverflowError(f"{number} does not fit in {cls.__name__}")
        return super().__new__(cls, number)

    @classmethod
    def max_value(cls) -> Self:
        return cls((1 << cls.BITS) - 1)

    @classmethod
    def get_byte_length(cls) -> int:
        """Width of the little-endian encoding."""
        return cls.BITS // 8

    def to_bytes(
        self, length: int | None = None, byteorder: str = "little", **kwargs: Any
    ) -> bytes:
        """Encode the value; little-endian at the natural width unless told otherwise."""
        width = self.get_byte_length() if length is None else length
        return int(self).to_bytes(width, byteorder, **kwargs)  # type: ignore[arg-type]

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Validate through the constructor; serialize as a plain integer."""

        def build(value: Any) -> BaseUint:
            try:
                return cls(value)
            except (OverflowError, TypeError) as e:
                raise ValueError(str(e)) from e

        bounded_int = core_schema.int_schema(ge=0, lt=1 << cls.BITS)
        return core_schema.json_or_python_schema(
            json_schema=core_schema.no_info_after_validator_function(build, bounded_int),
            python_schema=core_schema.no_info_plain_validator_function(build),
            serialization=core_schema.plain_serializer_function_ser_schema(int),
        )


class Uint64(BaseUint):
    """A 64-bit unsigned integer."""

    BITS = 64
