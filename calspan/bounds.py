"""Boundary kinds describing which endpoints of an interval are inclusive.

Each kind is a 2-bit value: bit 0 marks an inclusive start and bit 1 an
inclusive end. Inclusivity checks and the combination of two kinds are
single bitwise operations.
"""

from enum import IntEnum

START_INCLUSIVE = 0b01
END_INCLUSIVE = 0b10

_BRACKETS = {
    "[)": 0b01,
    "(]": 0b10,
    "[]": 0b11,
    "()": 0b00,
}


class Bounds(IntEnum):
    START_INCLUSIVE_END_EXCLUSIVE = 0b01
    START_EXCLUSIVE_END_INCLUSIVE = 0b10
    BOTH_INCLUSIVE = 0b11
    BOTH_EXCLUSIVE = 0b00

    @property
    def includes_start(self) -> bool:
        return bool(self & START_INCLUSIVE)

    @property
    def includes_end(self) -> bool:
        return bool(self & END_INCLUSIVE)

    @property
    def brackets(self) -> tuple[str, str]:
        """Interval notation characters, e.g. ``("[", ")")``."""
        return ("[" if self.includes_start else "(", "]" if self.includes_end else ")")

    def intersect(self, other: "Bounds") -> "Bounds":
        """Most restrictive combination: an endpoint stays inclusive only if
        it is inclusive in both kinds."""
        return Bounds(self & other)

    def touching_overlaps(self, other: "Bounds") -> bool:
        """True if two intervals with these kinds share any touching point.

        Holds only when every endpoint of both kinds is inclusive, which is
        the order-independent form of the check ``Interval.overlaps`` does
        at an exact touch.
        """
        return (self & other) == 0b11

    @classmethod
    def from_brackets(cls, notation: str) -> "Bounds":
        """Parse interval notation such as ``"[)"`` or ``"(]"``."""
        try:
            return cls(_BRACKETS[notation.strip()])
        except KeyError:
            valid = ", ".join(repr(key) for key in _BRACKETS)
            raise ValueError(
                f"Invalid bounds notation: {notation!r}\n" f"Valid notations: {valid}"
            ) from None
