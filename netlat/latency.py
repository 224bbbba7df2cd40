"""Latency derivation for network links.

Latency is the propagation delay of a link: its physical length divided by
the propagation speed of its medium. Units follow whatever distance unit the
topology uses for ``length`` (meters give seconds).
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from netlat.errors import ValidationError
from netlat.types import Medium

if TYPE_CHECKING:
    from netlat.graph import Edge


def link_latency(length: float, medium: Medium) -> float:
    """Return the latency of a link of ``length`` over ``medium``.

    Raises:
        ValidationError: If the length is negative or not finite.
    """
    if not math.isfinite(length) or length < 0:
        raise ValidationError(f"Link length must be a finite non-negative number, got {length}")
    return length / Medium.from_string(medium).speed


def latency(edge: "Edge") -> float:
    """Return the latency of a constructed edge."""
    return edge.length / edge.medium.speed
