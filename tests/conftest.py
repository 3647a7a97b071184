from __future__ import annotations

from typing import Any

import pytest
from justhtml import JustHTML


def parse(html: str) -> Any:
    """Parse an HTML snippet and return the document root node."""
    return JustHTML(html).root


def by_id(root: Any, element_id: str) -> Any:
    """Return the element with the given id, failing the test if it is missing."""
    stack = [root]
    while stack:
        node = stack.pop()
        attrs = getattr(node, "attrs", None) or {}
        if attrs.get("id") == element_id:
            return node
        stack.extend(reversed(getattr(node, "children", None) or []))
    raise AssertionError(f"No element with id {element_id!r}")


def ids(elements: list[Any]) -> list[str | None]:
    return [(element.attrs or {}).get("id") for element in elements]


NESTED_LISTS = """
<ul id="a">
  <ul id="b">
    <li id="c">Inner</li>
  </ul>
  <li id="d">Outer</li>
</ul>
"""


@pytest.fixture
def nested_lists() -> Any:
    return parse(NESTED_LISTS)
