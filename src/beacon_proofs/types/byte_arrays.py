"""
Fixed-length byte array types.

Every node of a hash tree is a `Bytes32` chunk. The other widths cover the
record fields a claim touches: 48-byte BLS public keys and the 20-byte
execution address embedded in withdrawal credentials.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic.annotated_handlers import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self


def _as_bytes(value: Any) -> bytes:
    """Raw bytes from bytes-like input, a hex string (0x optional) or a list of ints."""
    if isinstance(value, str):
        return bytes.fromhex(value[2:] if value.startswith(("0x", "0X")) else value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    return bytes(list(value))


class BaseBytes(bytes):
    """
    Immutable bytes of one exact width.

    Instances compare equal to plain `bytes` with the same content, but hash
    by type and content so chunks of different widths stay distinct as keys.
    """

    LENGTH: ClassVar[int]
    """Required width in bytes."""

    def __new__(cls, value: Any = b"") -> Self:
        """
        Raises:
            ValueError: If the input does not decode to exactly `LENGTH` bytes.
        """
        data = _as_bytes(value)
        if len(data) != cls.LENGTH:
            raise ValueError(f"{cls.__name__} expects exactly {cls.LENGTH} bytes, got {len(data)}")
        return super().__new__(cls, data)

    @classmethod
    def zero(cls) -> Self:
        """The all-zero value of this width."""
        return cls(bytes(cls.LENGTH))

    def hex(self, *args: Any) -> str:
        """Hex digits without a prefix, like `bytes.hex`."""
        return bytes(self).hex(*args)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(0x{self.hex()})"

    def __hash__(self) -> int:
        return hash((type(self), bytes(self)))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Python input: an instance, or raw bytes of the exact width.
        JSON input: a hex string, 0x prefix optional. JSON output: 0x-prefixed hex.
        """
        construct = core_schema.no_info_plain_validator_function(cls)
        exact_bytes = core_schema.bytes_schema(min_length=cls.LENGTH, max_length=cls.LENGTH)
        hex_string = core_schema.str_schema(pattern=r"^(0x)?[0-9a-fA-F]*$")

        return core_schema.json_or_python_schema(
            python_schema=core_schema.union_schema(
                [
                    core_schema.is_instance_schema(cls),
                    core_schema.chain_schema([exact_bytes, construct]),
                ]
            ),
            json_schema=core_schema.chain_schema([hex_string, construct]),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: f"0x{value.hex()}", when_used="json"
            ),
        )


class Bytes20(BaseBytes):
    """An execution-layer address."""

    LENGTH = 20


class Bytes32(BaseBytes):
    """One hash tree chunk: a leaf, a sibling or a root."""

    LENGTH = 32


class Bytes48(BaseBytes):
    """A BLS public key."""

    LENGTH = 48


ZERO_HASH: Bytes32 = Bytes32.zero()
"""The all-zero chunk, the value of every unpopulated leaf."""
