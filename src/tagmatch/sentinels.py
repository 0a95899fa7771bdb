"""Wildcard markers shared by handles, patterns and dispatch."""

from __future__ import annotations

from enum import Enum


class Wildcard(Enum):
    """Markers that can never collide with a user value.

    VALUE stands in for one constructor argument ("ignore this position").
    TAG is the catch-all selector ("any tag").
    """

    VALUE = "_"
    TAG = "*"

    def __repr__(self) -> str:
        return "_" if self is Wildcard.VALUE else "ANY"


_ = Wildcard.VALUE
ANY = Wildcard.TAG
