"""Exceptions raised by semloc and the failure messages they carry.

``build_failure_message`` turns a structured ``NotFound`` diagnostic into a
sentence naming the deepest part of the locator that matched and what was
missing after it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .result import Mismatch

if TYPE_CHECKING:
    from .locator import SemanticLocator
    from .result import NotFound


class LocatorError(ValueError):
    """Raised when a semantic locator string is invalid."""

    locator: str
    position: int | None

    def __init__(self, message: str, locator: str = "", position: int | None = None) -> None:
        super().__init__(message)
        self.locator = locator
        self.position = position


class DocumentOrderError(RuntimeError):
    """Raised when a role lookup returns elements out of document order.

    This is a broken collaborator, not a bad locator.
    """


class NoSuchElementError(LookupError):
    """Raised by find_element() when nothing matches the locator."""

    locator: SemanticLocator
    result: NotFound
    hidden_matches: list[Any]
    presentational_matches: list[Any]

    def __init__(
        self,
        locator: SemanticLocator,
        result: NotFound,
        hidden_matches: list[Any] | None = None,
        presentational_matches: list[Any] | None = None,
    ) -> None:
        self.locator = locator
        self.result = result
        self.hidden_matches = list(hidden_matches or [])
        self.presentational_matches = list(presentational_matches or [])
        super().__init__(build_failure_message(locator, result, self.hidden_matches, self.presentational_matches))


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _describe_partial(role: str, attributes: dict[str, str]) -> str:
    parts = [role]
    parts.extend(f"{key}:{value}" for key, value in attributes.items())
    return "{" + " ".join(parts) + "}"


def describe_mismatch(result: NotFound) -> str:
    """Describe what the search expected but could not find.

    Args:
        result: The failed search

    Returns:
        Human-readable description of the missing predicate
    """
    # locator imports this module
    from .locator import quote_name

    mismatch = result.not_found
    count = len(result.elements_found)
    partial = result.partial_find

    if mismatch.kind == Mismatch.KIND_ROLE:
        if result.closest_find:
            return f"but none of them contain an element with role {mismatch.name}"
        return f"no element has role {mismatch.name}"

    described = _describe_partial(partial.role, partial.attributes) if partial else "elements"
    if mismatch.kind == Mismatch.KIND_ATTRIBUTE:
        return (
            f"{_plural(count, 'element')} matched {described}, "
            f"but none had {mismatch.name}:{mismatch.value}"
        )

    return f"{_plural(count, 'element')} matched {described}, but none had the name {quote_name(mismatch.name)}"


def build_failure_message(
    locator: SemanticLocator,
    result: NotFound,
    hidden_matches: list[Any],
    presentational_matches: list[Any],
) -> str:
    """Build the message for a locator that matched nothing.

    Args:
        locator: The locator that was searched for
        result: The most specific failure across all search bases
        hidden_matches: Elements that would match if hidden elements counted
        presentational_matches: Elements that would match if role=presentation/none were ignored

    Returns:
        Human-readable error message string
    """
    lines = [f"Didn't find any elements matching semantic locator {locator}."]

    if result.closest_find:
        closest = locator.prefix(result.closest_find)
        # Role failures report the search bases, which are the closest matches
        if result.partial_find is None:
            lines.append(
                f"Found {_plural(len(result.elements_found), 'element')} matching {closest}, "
                f"{describe_mismatch(result)}."
            )
        else:
            lines.append(f"Closest match was {closest}; within it {describe_mismatch(result)}.")
    else:
        detail = describe_mismatch(result)
        lines.append(detail[0].upper() + detail[1:] + ".")

    if hidden_matches:
        lines.append(
            f"{_plural(len(hidden_matches), 'hidden element')} matched the locator. "
            "To match them, make sure they are not hidden (hidden, aria-hidden or display: none)."
        )
    if presentational_matches:
        lines.append(
            f"{_plural(len(presentational_matches), 'element')} with role=presentation or role=none "
            "matched the locator. Remove the presentational role to make them match."
        )

    return "\n".join(lines)
