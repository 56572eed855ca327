"""
Fixed-length byte array types.

Tree nodes, leaves and roots are all 32-byte digests. `Bytes32` gives them a
single validated representation that still behaves like plain `bytes`, so
values can be concatenated and fed straight into a hash function.
"""

from __future__ import annotations

from typing import Any, ClassVar, Iterable, SupportsIndex

from pydantic.annotated_handlers import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Final, Self


def _coerce_to_bytes(value: Any) -> bytes:
    """
    Turn a digest given in any of the usual spellings into raw bytes.

    Hex strings may carry a `0x` prefix. Integer iterables must hold values in
    `[0, 255]`. Anything else goes through the `bytes()` constructor.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return bytes.fromhex(value.removeprefix("0x"))
    if isinstance(value, Iterable):
        return bytes(bytearray(value))
    return bytes(value)


class BaseBytes(bytes):
    """
    Immutable `bytes` of one exact length.

    Subclasses only set `LENGTH`. Equality is plain byte equality, so an
    instance compares equal to the raw digest it was built from.
    """

    LENGTH: ClassVar[int]
    """Required size in bytes."""

    def __new__(cls, value: Any = b"") -> Self:
        """
        Validate `value` and wrap it.

        Raises:
            ValueError: If the value is not valid hex or has the wrong length.
        """
        if not hasattr(cls, "LENGTH"):
            raise TypeError(f"{cls.__name__} must define LENGTH")

        raw = _coerce_to_bytes(value)
        if len(raw) != cls.LENGTH:
            raise ValueError(f"{cls.__name__} expects exactly {cls.LENGTH} bytes, got {len(raw)}")
        return super().__new__(cls, raw)

    @classmethod
    def zero(cls) -> Self:
        """The all-zero value of this length."""
        return cls(bytes(cls.LENGTH))

    @classmethod
    def get_byte_length(cls) -> int:
        """Size in bytes of every value of this type."""
        return cls.LENGTH

    @classmethod
    def chunks(cls, data: bytes) -> list[Self]:
        """
        Split a concatenated buffer, such as a proof, into `LENGTH`-byte values.

        Raises:
            ValueError: If `len(data)` is not a multiple of `LENGTH`.
        """
        size = cls.LENGTH
        if len(data) % size != 0:
            raise ValueError(
                f"{cls.__name__}.chunks expects a multiple of {size} bytes, got {len(data)}"
            )
        view = memoryview(data)
        return [cls(view[offset : offset + size]) for offset in range(0, len(data), size)]

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Accept instances as-is and raw bytes of the right length; dump as hex.

        In JSON the value is the hex string produced by serialization, so a
        dumped model can be validated back.
        """
        from_raw = core_schema.chain_schema(
            [
                core_schema.bytes_schema(min_length=cls.LENGTH, max_length=cls.LENGTH),
                core_schema.no_info_plain_validator_function(cls),
            ]
        )
        from_hex = core_schema.chain_schema(
            [
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(cls),
            ]
        )
        return core_schema.json_or_python_schema(
            json_schema=from_hex,
            python_schema=core_schema.union_schema([core_schema.is_instance_schema(cls), from_raw]),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.hex()
            ),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.hex()})"

    def __hash__(self) -> int:
        return hash((type(self), bytes(self)))

    def hex(self, sep: str | bytes | None = None, bytes_per_sep: SupportsIndex = 1) -> str:
        """Lowercase hex of the raw bytes, without a `0x` prefix."""
        raw = bytes(self)
        return raw.hex() if sep is None else raw.hex(sep, bytes_per_sep)


class Bytes32(BaseBytes):
    """A 32-byte digest: a leaf value, an interior node, or a root."""

    LENGTH = 32


ZERO_HASH: Final = Bytes32.zero()
"""The all-zero digest, used as the value of an empty leaf."""
