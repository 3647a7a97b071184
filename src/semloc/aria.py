# ARIA roles, visibility and states for justhtml trees
# A pragmatic subset of HTML-AAM: enough to resolve semantic locators against
# ordinary markup. Not a complete implementation of the ARIA specifications.

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

# Elements that are never rendered, so neither they nor their subtree are exposed
NON_RENDERED_ELEMENTS: frozenset[str] = frozenset({"head", "noscript", "script", "style", "template"})

PRESENTATIONAL_ROLES: frozenset[str] = frozenset({"none", "presentation"})

# Tag name -> role, for tags whose role doesn't depend on attributes or context
_IMPLICIT_ROLES: dict[str, str] = {
    "article": "article",
    "aside": "complementary",
    "blockquote": "blockquote",
    "button": "button",
    "caption": "caption",
    "code": "code",
    "datalist": "listbox",
    "dd": "definition",
    "del": "deletion",
    "details": "group",
    "dfn": "term",
    "dialog": "dialog",
    "dt": "term",
    "em": "emphasis",
    "fieldset": "group",
    "figure": "figure",
    "form": "form",
    "h1": "heading",
    "h2": "heading",
    "h3": "heading",
    "h4": "heading",
    "h5": "heading",
    "h6": "heading",
    "hr": "separator",
    "ins": "insertion",
    "li": "listitem",
    "main": "main",
    "math": "math",
    "menu": "list",
    "meter": "meter",
    "nav": "navigation",
    "ol": "list",
    "optgroup": "group",
    "option": "option",
    "output": "status",
    "p": "paragraph",
    "progress": "progressbar",
    "search": "search",
    "strong": "strong",
    "sub": "subscript",
    "sup": "superscript",
    "table": "table",
    "tbody": "rowgroup",
    "textarea": "textbox",
    "tfoot": "rowgroup",
    "thead": "rowgroup",
    "time": "time",
    "tr": "row",
    "ul": "list",
}

_INPUT_ROLES: dict[str, str] = {
    "button": "button",
    "checkbox": "checkbox",
    "email": "textbox",
    "image": "button",
    "number": "spinbutton",
    "radio": "radio",
    "range": "slider",
    "reset": "button",
    "search": "searchbox",
    "submit": "button",
    "tel": "textbox",
    "text": "textbox",
    "url": "textbox",
}

# header/footer lose their landmark role inside these
_SECTIONING_ELEMENTS: frozenset[str] = frozenset({"article", "aside", "main", "nav", "section"})

_CHECKABLE_ROLES: frozenset[str] = frozenset(
    {"checkbox", "menuitemcheckbox", "menuitemradio", "radio", "switch", "treeitem"}
)
_SELECTABLE_ROLES: frozenset[str] = frozenset({"gridcell", "option", "row", "tab"})
_DISABLEABLE_ELEMENTS: frozenset[str] = frozenset({"button", "fieldset", "input", "optgroup", "option", "select", "textarea"})

CURRENT_VALUES: frozenset[str] = frozenset({"page", "step", "location", "date", "time", "true"})


def is_element(node: Any) -> bool:
    """Return True for element nodes (not text, comments, doctype or documents)."""
    name = getattr(node, "name", None)
    return bool(name) and not name.startswith("#") and name != "!doctype"


def _attr(element: Any, name: str) -> str | None:
    attrs = element.attrs or {}
    if name not in attrs:
        return None
    value = attrs[name]
    return "" if value is None else value


def _is_html(element: Any) -> bool:
    return getattr(element, "namespace", "html") in (None, "html")


def _style_hides(style: str) -> bool:
    for declaration in style.split(";"):
        prop, sep, value = declaration.partition(":")
        if not sep:
            continue
        prop = prop.strip().lower()
        value = value.replace("!important", "").strip().lower()
        if prop == "display" and value == "none":
            return True
        if prop == "visibility" and value in ("hidden", "collapse"):
            return True
    return False


def is_hidden(element: Any) -> bool:
    """Return True if the element hides itself and its subtree from assistive technology.

    Only the element's own markup is checked; callers walk ancestors themselves.
    """
    if element.name in NON_RENDERED_ELEMENTS:
        return True
    if _attr(element, "hidden") is not None:
        return True
    if (_attr(element, "aria-hidden") or "").strip().lower() == "true":
        return True
    if element.name == "input" and (_attr(element, "type") or "").strip().lower() == "hidden":
        return True
    style = _attr(element, "style")
    return bool(style) and _style_hides(style)


def is_hidden_in_tree(element: Any) -> bool:
    node = element
    while node is not None and is_element(node):
        if is_hidden(node):
            return True
        node = node.parent
    return False


def _has_ancestor(element: Any, names: frozenset[str]) -> bool:
    node = element.parent
    while node is not None and is_element(node):
        if node.name in names:
            return True
        node = node.parent
    return False


def implicit_role(element: Any) -> str | None:
    """Return the role HTML gives an element when it has no role attribute."""
    if not _is_html(element):
        return None
    tag = element.name

    if tag in ("a", "area"):
        return "link" if _attr(element, "href") is not None else None

    if tag == "img":
        alt = _attr(element, "alt")
        if alt == "":
            return None
        return "img"

    if tag == "input":
        input_type = (_attr(element, "type") or "text").strip().lower()
        role = _INPUT_ROLES.get(input_type)
        if role in ("textbox", "searchbox") and _attr(element, "list") is not None:
            return "combobox"
        return role

    if tag == "select":
        size = _attr(element, "size") or ""
        if _attr(element, "multiple") is not None or (size.isdigit() and int(size) > 1):
            return "listbox"
        return "combobox"

    if tag == "section":
        if _attr(element, "aria-label") or _attr(element, "aria-labelledby"):
            return "region"
        return None

    if tag in ("header", "footer"):
        if _has_ancestor(element, _SECTIONING_ELEMENTS):
            return None
        return "banner" if tag == "header" else "contentinfo"

    if tag == "td":
        return "cell"

    if tag == "th":
        scope = (_attr(element, "scope") or "").strip().lower()
        return "rowheader" if scope in ("row", "rowgroup") else "columnheader"

    return _IMPLICIT_ROLES.get(tag)


def role_of(element: Any, include_presentational: bool = False) -> str | None:
    """Return the element's effective role.

    An explicit role attribute wins over the implicit one. Presentational roles
    leave the element without a role unless ``include_presentational`` is set,
    in which case the implicit role applies.
    """
    explicit = (_attr(element, "role") or "").split()
    if explicit:
        role = explicit[0].lower()
        if role in PRESENTATIONAL_ROLES:
            return implicit_role(element) if include_presentational else None
        return role
    return implicit_role(element)


def find_by_role(
    role: str,
    base: Any,
    include_hidden: bool = False,
    include_presentational: bool = False,
) -> list[Any]:
    """Return descendants of ``base`` (not ``base`` itself) with ``role``, in document order."""
    results: list[Any] = []
    _collect_by_role(base, role, include_hidden, include_presentational, results)
    return results


def _collect_by_role(
    node: Any,
    role: str,
    include_hidden: bool,
    include_presentational: bool,
    results: list[Any],
) -> None:
    """Recursively collect matching elements, skipping hidden subtrees."""
    for child in node.children or ():
        if not is_element(child):
            continue
        if not include_hidden and is_hidden(child):
            continue
        if role_of(child, include_presentational) == role:
            results.append(child)
        _collect_by_role(child, role, include_hidden, include_presentational, results)


def _is_disabled(element: Any) -> bool:
    node = element
    while node is not None and is_element(node):
        if (_attr(node, "aria-disabled") or "").strip().lower() == "true":
            return True
        node = node.parent

    if element.name not in _DISABLEABLE_ELEMENTS:
        return False
    if _attr(element, "disabled") is not None:
        return True

    # A disabled fieldset disables its controls, except those in its first legend
    child = element
    node = element.parent
    while node is not None and is_element(node):
        if node.name == "fieldset" and _attr(node, "disabled") is not None:
            legends = [c for c in node.children if is_element(c) and c.name == "legend"]
            if not (legends and legends[0] is child):
                return True
        if node.name == "option" or node.name == "optgroup":
            if _attr(node, "disabled") is not None:
                return True
        child = node
        node = node.parent
    return False


def _tristate(value: str | None, allowed: tuple[str, ...]) -> str | None:
    if value is None:
        return None
    value = value.strip().lower()
    return value if value in allowed else None


def attribute_value(element: Any, name: str) -> str | None:
    """Resolve the value of a supported ARIA attribute, or None if it doesn't apply."""
    role = role_of(element, include_presentational=True)

    if name == "checked":
        value = _tristate(_attr(element, "aria-checked"), ("true", "false", "mixed"))
        if value is not None:
            return value
        if element.name == "input" and (_attr(element, "type") or "").strip().lower() in ("checkbox", "radio"):
            return "true" if _attr(element, "checked") is not None else "false"
        return "false" if role in _CHECKABLE_ROLES else None

    if name == "pressed":
        return _tristate(_attr(element, "aria-pressed"), ("true", "false", "mixed"))

    if name == "expanded":
        value = _tristate(_attr(element, "aria-expanded"), ("true", "false"))
        if value is None and element.name == "summary":
            parent = element.parent
            if parent is not None and getattr(parent, "name", None) == "details":
                return "true" if _attr(parent, "open") is not None else "false"
        return value

    if name == "selected":
        value = _tristate(_attr(element, "aria-selected"), ("true", "false"))
        if value is not None:
            return value
        if element.name == "option" and _is_html(element):
            return "true" if _attr(element, "selected") is not None else "false"
        return "false" if role in _SELECTABLE_ROLES else None

    if name == "disabled":
        return "true" if _is_disabled(element) else "false"

    if name == "current":
        value = (_attr(element, "aria-current") or "").strip().lower()
        if not value or value == "false":
            return "false"
        return value if value in CURRENT_VALUES else "true"

    if name == "level":
        level = (_attr(element, "aria-level") or "").strip()
        if level.isdigit() and int(level) > 0:
            return str(int(level))
        if element.name in ("h1", "h2", "h3", "h4", "h5", "h6") and _is_html(element):
            return element.name[1]
        return "2" if role == "heading" else None

    logger.debug("No ARIA value for unsupported attribute %r", name)
    return None
