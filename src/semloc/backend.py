from __future__ import annotations

from typing import Any

from . import aria, naming


class AriaModel:
    """Role, state and name lookups used by the search engine.

    Subclass and override to search trees that aren't justhtml documents, or to
    plug in a more complete accessibility implementation.
    """

    __slots__ = ()

    def find_by_role(
        self,
        role: str,
        base: Any,
        include_hidden: bool = False,
        include_presentational: bool = False,
    ) -> list[Any]:
        return aria.find_by_role(role, base, include_hidden, include_presentational)

    def attribute_value(self, element: Any, name: str) -> str | None:
        return aria.attribute_value(element, name)

    def accessible_name(self, element: Any) -> str:
        return naming.accessible_name(element)

    def name_matches(self, pattern: str, name: str) -> bool:
        return naming.name_matches(pattern, name)


# Global model instance
DEFAULT_ARIA: AriaModel = AriaModel()
