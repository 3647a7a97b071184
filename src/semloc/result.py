"""Search results: either the elements found, or a diagnostic about the closest miss."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .locator import SemanticNode


class Mismatch:
    """The predicate that eliminated every remaining candidate."""

    __slots__ = ("kind", "name", "value")

    KIND_ROLE: str = "role"
    KIND_ATTRIBUTE: str = "attribute"
    KIND_NAME: str = "name"

    kind: str
    name: str
    value: str | None

    def __init__(self, kind: str, name: str, value: str | None = None) -> None:
        self.kind = kind
        # Role for KIND_ROLE, attribute name for KIND_ATTRIBUTE, name pattern for KIND_NAME
        self.name = name
        self.value = value

    @classmethod
    def role(cls, role: str) -> Mismatch:
        return cls(cls.KIND_ROLE, role)

    @classmethod
    def attribute(cls, name: str, value: str) -> Mismatch:
        return cls(cls.KIND_ATTRIBUTE, name, value)

    @classmethod
    def accessible_name(cls, pattern: str) -> Mismatch:
        return cls(cls.KIND_NAME, pattern)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mismatch):
            return NotImplemented
        return self.kind == other.kind and self.name == other.name and self.value == other.value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Mismatch({self.kind!r}, {self.name!r}, {self.value!r})"
        return f"Mismatch({self.kind!r}, {self.name!r})"


class PartialFind:
    """Role and attributes already satisfied when a later stage failed."""

    __slots__ = ("attributes", "role")

    role: str
    attributes: dict[str, str]

    def __init__(self, role: str, attributes: Mapping[str, str] | None = None) -> None:
        self.role = role
        self.attributes = dict(attributes) if attributes else {}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PartialFind):
            return NotImplemented
        return self.role == other.role and self.attributes == other.attributes

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PartialFind({self.role!r}, {self.attributes!r})"


class Found:
    """Non-empty, duplicate-free elements in document order."""

    __slots__ = ("elements",)

    elements: list[Any]

    def __init__(self, elements: list[Any]) -> None:
        self.elements = list(elements)

    def __repr__(self) -> str:
        return f"Found({self.elements!r})"


class NotFound:
    """Diagnostic for a search that matched nothing."""

    __slots__ = ("closest_find", "elements_found", "not_found", "partial_find")

    closest_find: list[SemanticNode]
    elements_found: list[Any]
    not_found: Mismatch
    partial_find: PartialFind | None

    def __init__(
        self,
        closest_find: list[SemanticNode],
        elements_found: list[Any],
        not_found: Mismatch,
        partial_find: PartialFind | None = None,
    ) -> None:
        self.closest_find = list(closest_find)
        self.elements_found = list(elements_found)
        self.not_found = not_found
        self.partial_find = partial_find

    def __repr__(self) -> str:
        return (
            f"NotFound(closest_find={self.closest_find!r}, not_found={self.not_found!r}, "
            f"partial_find={self.partial_find!r}, elements_found={len(self.elements_found)})"
        )


# Type alias for search outcomes
Result = Found | NotFound


def combine_most_specific(results: list[NotFound]) -> NotFound:
    """Pick the failure that got furthest through the locator.

    The longest ``closest_find`` wins; ties go to the earliest result.
    """
    if not results:
        raise ValueError("combine_most_specific() needs at least one result")
    best = results[0]
    for result in results[1:]:
        if len(result.closest_find) > len(best.closest_find):
            best = result
    return best
