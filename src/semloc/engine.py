# Semantic locator search engine
# Resolves parsed locators against an element tree, one predicate at a time

from __future__ import annotations

import logging
from typing import Any

from .backend import DEFAULT_ARIA, AriaModel
from .errors import NoSuchElementError
from .locator import SemanticLocator, SemanticNode, parse_locator
from .options import SearchOptions
from .order import assert_in_document_order, outer_nodes_only, remove_duplicates, sort_by_document_order
from .result import Found, Mismatch, NotFound, PartialFind, Result, combine_most_specific

logger = logging.getLogger(__name__)


def _resolve_root(root: Any) -> Any:
    # Accept a JustHTML document as well as a node
    if root is not None and not hasattr(root, "children") and hasattr(root, "root"):
        return root.root
    return root


def _resolve_locator(locator: str | SemanticLocator) -> SemanticLocator:
    if isinstance(locator, SemanticLocator):
        return locator
    return parse_locator(locator)


def find_elements(
    locator: str | SemanticLocator,
    root: Any,
    options: SearchOptions | None = None,
    aria: AriaModel | None = None,
) -> list[Any]:
    """
    Find all elements under root matching a semantic locator.

    Args:
        locator: A locator string such as ``"{list} outer {listitem}"``, or a parsed locator
        root: The node (or JustHTML document) to search below
        options: Visibility switches; hidden and presentational elements are excluded by default
        aria: Role, state and name lookups; defaults to the HTML implementation

    Returns:
        Matching elements in document order, or an empty list

    Raises:
        LocatorError: If the locator is malformed
    """
    result = find_by_semantic_locator(_resolve_locator(locator), root, options, aria)
    if isinstance(result, NotFound):
        return []
    return result.elements


def find_element(
    locator: str | SemanticLocator,
    root: Any,
    options: SearchOptions | None = None,
    aria: AriaModel | None = None,
) -> Any:
    """
    Find the first element in document order under root matching a semantic locator.

    Raises:
        LocatorError: If the locator is malformed
        NoSuchElementError: If nothing matches. The error explains how close the
            search came, and whether hidden or presentational elements would match.
    """
    parsed = _resolve_locator(locator)
    base = _resolve_root(root)
    options = options or SearchOptions()
    result = find_by_semantic_locator(parsed, base, options, aria)
    if isinstance(result, Found):
        return result.elements[0]

    # Diagnostic-only retries, used to phrase a more helpful message
    hidden_matches: list[Any] = []
    if not options.include_hidden:
        hidden_options = SearchOptions(include_hidden=True, include_presentational=options.include_presentational)
        hidden_result = find_by_semantic_locator(parsed, base, hidden_options, aria)
        if isinstance(hidden_result, Found):
            hidden_matches = hidden_result.elements

    presentational_matches: list[Any] = []
    if not options.include_presentational:
        presentational_options = SearchOptions(include_hidden=options.include_hidden, include_presentational=True)
        presentational_result = find_by_semantic_locator(parsed, base, presentational_options, aria)
        if isinstance(presentational_result, Found):
            presentational_matches = presentational_result.elements

    raise NoSuchElementError(parsed, result, hidden_matches, presentational_matches)


def find_by_semantic_locator(
    locator: SemanticLocator,
    root: Any,
    options: SearchOptions | None = None,
    aria: AriaModel | None = None,
) -> Result:
    """Search below ``root``, returning Found in document order or the most specific NotFound."""
    root = _resolve_root(root)
    options = options or SearchOptions()
    aria = aria or DEFAULT_ARIA

    search_base = find_by_semantic_nodes(locator.pre_outer, [root], options, aria)
    if isinstance(search_base, NotFound) or not locator.post_outer:
        return search_base

    # 'outer' is relative to each search base, so every base is searched
    # separately and its results reduced to the outermost ones on their own
    logger.debug("Searching %d base(s) for outer %s", len(search_base.elements), list(locator.post_outer))
    results = [find_by_semantic_nodes(locator.post_outer, [base], options, aria) for base in search_base.elements]

    elements_found: list[Any] = []
    for result in results:
        if isinstance(result, Found):
            elements_found.extend(outer_nodes_only(result.elements))

    if not elements_found:
        failures = [result for result in results if isinstance(result, NotFound)]
        none_found = combine_most_specific(failures)
        # Every base that failed the same way contributes to the closest matches
        closest_matches: list[Any] = []
        for failure in failures:
            if (
                failure.closest_find == none_found.closest_find
                and failure.not_found == none_found.not_found
                and failure.partial_find == none_found.partial_find
            ):
                closest_matches.extend(failure.elements_found)
        return NotFound(
            list(locator.pre_outer) + none_found.closest_find,
            remove_duplicates(sort_by_document_order(closest_matches)),
            none_found.not_found,
            none_found.partial_find,
        )

    # Bases may be nested (e.g. "{list} outer {listitem}" on nested lists), so the
    # same element can be found more than once and out of order
    return Found(remove_duplicates(sort_by_document_order(elements_found)))


def find_by_semantic_nodes(
    nodes: list[SemanticNode] | tuple[SemanticNode, ...],
    search_base: list[Any],
    options: SearchOptions,
    aria: AriaModel,
) -> Result:
    """Apply each node in turn, each one searching below the previous one's matches."""
    for i, node in enumerate(nodes):
        result = find_by_semantic_node(node, search_base, options, aria)
        if isinstance(result, NotFound):
            return NotFound(list(nodes[:i]), result.elements_found, result.not_found, result.partial_find)
        search_base = result.elements
    return Found(search_base)


def find_by_semantic_node(
    node: SemanticNode,
    search_base: list[Any],
    options: SearchOptions,
    aria: AriaModel,
) -> Result:
    """
    Find elements below ``search_base`` matching one node's role, attributes and name.

    ``search_base`` must be in document order. Results are in document order.
    """
    # Anything below a nested base is also below its ancestor, so searching the
    # outermost bases is enough and keeps the concatenated results in order
    search_base = outer_nodes_only(search_base)

    elements: list[Any] = []
    for base in search_base:
        elements.extend(aria.find_by_role(node.role, base, options.include_hidden, options.include_presentational))
    if not elements:
        logger.debug("No elements with role %r under %d base(s)", node.role, len(search_base))
        return NotFound([], search_base, Mismatch.role(node.role))

    resolved_attributes: dict[str, str] = {}
    for name, value in node.attributes.items():
        next_elements = [element for element in elements if aria.attribute_value(element, name) == value]
        if not next_elements:
            logger.debug("None of %d %r element(s) have %s:%s", len(elements), node.role, name, value)
            return NotFound([], elements, Mismatch.attribute(name, value), PartialFind(node.role, resolved_attributes))
        elements = next_elements
        resolved_attributes[name] = value

    # An empty name constrains nothing
    if node.name:
        pattern = node.name
        next_elements = [element for element in elements if aria.name_matches(pattern, aria.accessible_name(element))]
        if not next_elements:
            logger.debug("None of %d %r element(s) are named %r", len(elements), node.role, pattern)
            return NotFound([], elements, Mismatch.accessible_name(pattern), PartialFind(node.role, node.attributes))
        elements = next_elements

    assert_in_document_order(elements)
    logger.debug("%s matched %d element(s)", node, len(elements))
    return Found(elements)
