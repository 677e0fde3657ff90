"""Fixed-width symbol serializers used for the leaf payloads of the header."""
from abc import ABC, abstractmethod
from typing import Any


class BinaryConverter(ABC):
    width: int

    @abstractmethod
    def serialize(self, sym: Any) -> str:
        """Return exactly ``width`` bits ("0"/"1" characters) for ``sym``."""

    @abstractmethod
    def deserialize(self, bits: str) -> Any:
        """Inverse of :meth:`serialize`."""


class UIntConverter(BinaryConverter):
    def __init__(self, width: int):
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        self.width = width

    def serialize(self, sym: int) -> str:
        if not 0 <= sym < (1 << self.width):
            raise ValueError(f"symbol {sym!r} does not fit in {self.width} bits")
        return format(sym, f"0{self.width}b")

    def deserialize(self, bits: str) -> int:
        if len(bits) != self.width:
            raise ValueError(f"expected {self.width} bits, got {len(bits)}")
        return int(bits, 2)

    def __repr__(self):
        return f"{type(self).__name__}(width={self.width})"


class ByteConverter(UIntConverter):
    def __init__(self):
        super().__init__(8)

    def __repr__(self):
        return "ByteConverter()"


class CharConverter(BinaryConverter):
    # one-character strings, stored as their code point
    def __init__(self, width: int = 8):
        self._ints = UIntConverter(width)
        self.width = width

    def serialize(self, sym: str) -> str:
        if not isinstance(sym, str) or len(sym) != 1:
            raise ValueError(f"expected a single character, got {sym!r}")
        return self._ints.serialize(ord(sym))

    def deserialize(self, bits: str) -> str:
        return chr(self._ints.deserialize(bits))

    def __repr__(self):
        return f"CharConverter(width={self.width})"


BYTE = ByteConverter()
