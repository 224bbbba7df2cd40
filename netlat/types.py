"""Base types and enums for network latency analysis."""

from __future__ import annotations

from enum import Enum
from typing import Union

from netlat.errors import ValidationError

#: Represents a numeric weight in the network (latency, capacity, flow).
Cost = Union[int, float]

#: Propagation speed of a signal over copper, in distance units per second.
COPPER_SPEED = 2.3e8

#: Propagation speed of a signal over optical fiber, in distance units per second.
OPTICAL_SPEED = 2.0e8


class Medium(Enum):
    """Transmission medium of a link.

    Each member carries the propagation speed used to derive latency. The set
    is closed: parsing any other token raises ``ValidationError``.
    """

    COPPER = "copper"
    OPTICAL = "optical"

    @property
    def speed(self) -> float:
        """Propagation speed for this medium."""
        return _SPEEDS[self]

    @classmethod
    def from_string(cls, value: str) -> "Medium":
        """Parse a medium token.

        Args:
            value: Case-insensitive token. ``"copper"``, ``"optical"`` and the
                legacy ``"optic"`` are accepted.

        Returns:
            The corresponding Medium member.

        Raises:
            ValidationError: If the token is not a recognized medium.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValidationError(f"Medium must be a string, got {value!r}")
        token = value.strip().lower()
        if token == "optic":
            token = cls.OPTICAL.value
        try:
            return cls(token)
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValidationError(
                f"Invalid medium '{value}'. Valid values are: {valid}"
            ) from None

    def __str__(self) -> str:
        return self.value


_SPEEDS = {
    Medium.COPPER: COPPER_SPEED,
    Medium.OPTICAL: OPTICAL_SPEED,
}
