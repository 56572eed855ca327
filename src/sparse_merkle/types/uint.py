"""
Fixed-width unsigned integers used as tree positions.

A depth-257 tree addresses `2**256` leaves, more than any machine word holds,
so positions are Python integers pinned to a bit width. Arithmetic between two
positions stays in the width; arithmetic with anything else is refused, which
keeps an accidental `int` key from silently missing a sparse level lookup.
"""

from __future__ import annotations

from typing import Any, ClassVar, Literal, SupportsIndex, SupportsInt

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from typing_extensions import Self


class BaseUint(int):
    """An `int` restricted to `[0, 2**BITS)` that only combines with its own type."""

    BITS: ClassVar[int]
    """Bit width, set by each concrete subclass."""

    def __new__(cls, value: SupportsInt) -> Self:
        """
        Build a value of this width.

        Raises:
            OverflowError: If `value` does not fit in `BITS` unsigned bits.
        """
        number = int(value)
        if number < 0 or number >> cls.BITS:
            raise OverflowError(f"{number} is out of range for {cls.__name__}")
        return super().__new__(cls, number)

    @classmethod
    def max_value(cls) -> Self:
        """The largest position of this width."""
        return cls((1 << cls.BITS) - 1)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Validate plain integers into this type and dump back to `int`.

        Booleans and non-integers are rejected even in lax mode. JSON input is
        first range-checked by pydantic's own integer schema.
        """

        def to_uint(value: Any) -> BaseUint:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Expected int, got {type(value).__name__}")
            try:
                return cls(value)
            except OverflowError as e:
                raise ValueError(str(e)) from e

        return core_schema.json_or_python_schema(
            json_schema=core_schema.no_info_after_validator_function(
                to_uint, core_schema.int_schema(ge=0, lt=1 << cls.BITS)
            ),
            python_schema=core_schema.no_info_plain_validator_function(to_uint),
            serialization=core_schema.plain_serializer_function_ser_schema(int),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        json_schema = handler(schema)
        json_schema.update(format=f"uint{cls.BITS}")
        return json_schema

    def to_bytes(
        self,
        length: SupportsIndex | None = None,
        byteorder: Literal["little", "big"] = "big",
        *,
        signed: bool = False,
    ) -> bytes:
        """Encode the value, `BITS // 8` big-endian bytes unless told otherwise."""
        size = self.BITS // 8 if length is None else int(length)
        return super().to_bytes(size, byteorder, signed=signed)

    def _same_type(self, other: Any, op: str) -> int:
        """Return `other` as an `int`, or refuse an operand of another type."""
        if type(other) is not type(self):
            raise TypeError(
                f"Unsupported operand type(s) for {op}: "
                f"'{type(self).__name__}' and '{type(other).__name__}'"
            )
        return int(other)

    # Arithmetic. Results are re-wrapped, so leaving the range raises OverflowError.

    def __add__(self, other: Any) -> Self:
        return type(self)(int(self) + self._same_type(other, "+"))

    def __radd__(self, other: Any) -> Self:
        return type(self)(self._same_type(other, "+") + int(self))

    def __sub__(self, other: Any) -> Self:
        return type(self)(int(self) - self._same_type(other, "-"))

    def __rsub__(self, other: Any) -> Self:
        return type(self)(self._same_type(other, "-") - int(self))

    def __floordiv__(self, other: Any) -> Self:
        return type(self)(int(self) // self._same_type(other, "//"))

    def __rfloordiv__(self, other: Any) -> Self:
        return type(self)(self._same_type(other, "//") // int(self))

    def __mod__(self, other: Any) -> Self:
        return type(self)(int(self) % self._same_type(other, "%"))

    def __rmod__(self, other: Any) -> Self:
        return type(self)(self._same_type(other, "%") % int(self))

    # Comparisons.

    def __eq__(self, other: object) -> bool:
        return int(self) == self._same_type(other, "==")

    def __ne__(self, other: object) -> bool:
        return int(self) != self._same_type(other, "!=")

    def __lt__(self, other: Any) -> bool:
        return int(self) < self._same_type(other, "<")

    def __le__(self, other: Any) -> bool:
        return int(self) <= self._same_type(other, "<=")

    def __gt__(self, other: Any) -> bool:
        return int(self) > self._same_type(other, ">")

    def __ge__(self, other: Any) -> bool:
        return int(self) >= self._same_type(other, ">=")

    def __hash__(self) -> int:
        # Distinct from `hash(int)`, so a plain-int key never aliases a position.
        return hash((type(self), int(self)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        return str(int(self))


class Uint256(BaseUint):
    """A 256-bit unsigned integer, wide enough for every leaf of a depth-257 tree."""

    BITS = 256
