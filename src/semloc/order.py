"""Document order and containment helpers for element trees.

Elements only need ``parent`` and ``children`` attributes, as provided by
``justhtml`` nodes.
"""

from __future__ import annotations

from typing import Any

from .errors import DocumentOrderError


def document_position(node: Any) -> tuple[int, ...]:
    """Return the child-index path from the tree root down to ``node``.

    Comparing paths lexicographically gives document order: an ancestor's path
    is a prefix of its descendants' paths and so sorts first.
    """
    path: list[int] = []
    current = node
    parent = current.parent
    while parent is not None:
        path.append(_child_index(parent, current))
        current = parent
        parent = current.parent
    path.reverse()
    return tuple(path)


def _child_index(parent: Any, child: Any) -> int:
    for i, candidate in enumerate(parent.children or ()):
        if candidate is child:
            return i
    raise ValueError(f"{child!r} is not a child of {parent!r}")


def compare_node_order(a: Any, b: Any) -> int:
    """Return -1 if ``a`` precedes ``b`` in document order, 1 if it follows, 0 if same."""
    if a is b:
        return 0
    pos_a = document_position(a)
    pos_b = document_position(b)
    if pos_a < pos_b:
        return -1
    if pos_a > pos_b:
        return 1
    return 0


def contains(ancestor: Any, node: Any) -> bool:
    """Return True if ``node`` is a strict descendant of ``ancestor``."""
    current = node.parent
    while current is not None:
        if current is ancestor:
            return True
        current = current.parent
    return False


def sort_by_document_order(nodes: list[Any]) -> list[Any]:
    return sorted(nodes, key=document_position)


def outer_nodes_only(nodes: list[Any]) -> list[Any]:
    """Keep only nodes with no ancestor also present in ``nodes``.

    Input order is preserved.
    """
    present = {id(node) for node in nodes}
    result: list[Any] = []
    for node in nodes:
        ancestor = node.parent
        covered = False
        while ancestor is not None:
            if id(ancestor) in present:
                covered = True
                break
            ancestor = ancestor.parent
        if not covered:
            result.append(node)
    return result


def remove_duplicates(nodes: list[Any]) -> list[Any]:
    """Drop repeated elements (by identity), keeping the first occurrence."""
    seen: set[int] = set()
    result: list[Any] = []
    for node in nodes:
        if id(node) in seen:
            continue
        seen.add(id(node))
        result.append(node)
    return result


def assert_in_document_order(nodes: list[Any]) -> None:
    """Raise DocumentOrderError unless each node strictly follows the one before it."""
    previous: tuple[int, ...] | None = None
    for node in nodes:
        position = document_position(node)
        if previous is not None and position <= previous:
            raise DocumentOrderError(f"Elements are not in document order: {node!r} at {position} after {previous}")
        previous = position
