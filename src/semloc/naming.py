"""Accessible names for justhtml elements, and name pattern matching."""

from __future__ import annotations

from typing import Any, Iterator

from .aria import is_element, is_hidden, role_of

# Roles whose accessible name comes from their content
NAME_FROM_CONTENT_ROLES: frozenset[str] = frozenset(
    {
        "button",
        "cell",
        "checkbox",
        "columnheader",
        "gridcell",
        "heading",
        "link",
        "listitem",
        "menuitem",
        "menuitemcheckbox",
        "menuitemradio",
        "option",
        "radio",
        "row",
        "rowheader",
        "switch",
        "tab",
        "tooltip",
        "treeitem",
    }
)

_LABELABLE_ELEMENTS: frozenset[str] = frozenset({"input", "meter", "output", "progress", "select", "textarea"})

# Elements that separate words when their text is joined
_BLOCK_ELEMENTS: frozenset[str] = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "dd",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "li",
        "main",
        "nav",
        "ol",
        "p",
        "section",
        "table",
        "td",
        "th",
        "tr",
        "ul",
    }
)


def normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


def _attr(element: Any, name: str) -> str:
    attrs = element.attrs or {}
    value = attrs.get(name)
    return value or ""


def _tree_root(node: Any) -> Any:
    while node.parent is not None:
        node = node.parent
    return node


def _iter_elements(node: Any) -> Iterator[Any]:
    for child in node.children or ():
        if is_element(child):
            yield child
            yield from _iter_elements(child)


def _find_by_id(root: Any, element_id: str) -> Any | None:
    for element in _iter_elements(root):
        if _attr(element, "id") == element_id:
            return element
    return None


def _collect_text(node: Any, parts: list[str]) -> None:
    for child in node.children or ():
        name = getattr(child, "name", "")
        if name == "#text":
            if child.data:
                parts.append(child.data)
            continue
        if not is_element(child) or is_hidden(child):
            continue

        label = _attr(child, "aria-label").strip()
        if label:
            parts.append(f" {label} ")
            continue
        if name == "img":
            parts.append(f" {_attr(child, 'alt')} ")
            continue
        if name == "br":
            parts.append(" ")
            continue

        block = name in _BLOCK_ELEMENTS
        if block:
            parts.append(" ")
        _collect_text(child, parts)
        if block:
            parts.append(" ")


def text_content(element: Any) -> str:
    """Return the visible text of ``element``, with whitespace collapsed."""
    parts: list[str] = []
    _collect_text(element, parts)
    return normalize_whitespace("".join(parts))


def _label_text(element: Any) -> str:
    labels: list[str] = []
    element_id = _attr(element, "id")
    if element_id:
        for candidate in _iter_elements(_tree_root(element)):
            if candidate.name == "label" and _attr(candidate, "for") == element_id:
                labels.append(text_content(candidate))

    node = element.parent
    while node is not None and is_element(node):
        if node.name == "label":
            labels.append(text_content(node))
            break
        node = node.parent

    return " ".join(label for label in labels if label)


def _first_child_text(element: Any, tag: str) -> str:
    for child in element.children or ():
        if is_element(child) and child.name == tag:
            return text_content(child)
    return ""


def _native_name(element: Any) -> str:
    tag = element.name

    if tag in ("img", "area"):
        return _attr(element, "alt")

    if tag == "input":
        input_type = _attr(element, "type").strip().lower()
        if input_type == "image":
            return _attr(element, "alt") or _attr(element, "value")
        if input_type in ("button", "submit", "reset"):
            value = _attr(element, "value")
            if value:
                return value
            return {"submit": "Submit", "reset": "Reset"}.get(input_type, "")

    if tag in _LABELABLE_ELEMENTS:
        return _label_text(element)

    if tag == "fieldset":
        return _first_child_text(element, "legend")
    if tag == "figure":
        return _first_child_text(element, "figcaption")
    if tag == "table":
        return _first_child_text(element, "caption")

    return ""


def _compute_name(element: Any, follow_labelledby: bool) -> str:
    if follow_labelledby:
        ids = _attr(element, "aria-labelledby").split()
        if ids:
            root = _tree_root(element)
            parts: list[str] = []
            for element_id in ids:
                target = _find_by_id(root, element_id)
                if target is not None:
                    parts.append(_compute_name(target, follow_labelledby=False))
            joined = normalize_whitespace(" ".join(parts))
            if joined:
                return joined

    label = normalize_whitespace(_attr(element, "aria-label"))
    if label:
        return label

    native = normalize_whitespace(_native_name(element))
    if native:
        return native

    # Elements referenced by aria-labelledby contribute their content whatever their role
    if not follow_labelledby or role_of(element) in NAME_FROM_CONTENT_ROLES:
        content = text_content(element)
        if content:
            return content

    return normalize_whitespace(_attr(element, "title"))


def accessible_name(element: Any) -> str:
    """Compute the accessible name of ``element``.

    Sources, in priority order: aria-labelledby, aria-label, native labelling
    (alt, label elements, button values, legends and captions), content for
    roles named from content, then title.
    """
    return _compute_name(element, follow_labelledby=True)


def name_matches(pattern: str, name: str) -> bool:
    """Match an accessible name against an exact string or a ``*`` wildcard pattern.

    ``'Save*'`` matches names starting with "Save", ``'*draft'`` names ending in
    "draft", and ``'*draft*'`` names containing it.
    """
    name = normalize_whitespace(name)
    if len(pattern) >= 2 and pattern.startswith("*") and pattern.endswith("*"):
        return pattern[1:-1] in name
    if pattern.startswith("*"):
        return name.endswith(pattern[1:])
    if pattern.endswith("*"):
        return name.startswith(pattern[:-1])
    return name == pattern
