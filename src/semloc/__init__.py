from .backend import DEFAULT_ARIA, AriaModel
from .engine import find_by_semantic_locator, find_element, find_elements
from .errors import DocumentOrderError, LocatorError, NoSuchElementError, build_failure_message
from .locator import SemanticLocator, SemanticNode, parse_locator
from .options import SearchOptions
from .result import Found, Mismatch, NotFound, PartialFind, Result

__all__ = [
    "DEFAULT_ARIA",
    "AriaModel",
    "DocumentOrderError",
    "Found",
    "LocatorError",
    "Mismatch",
    "NoSuchElementError",
    "NotFound",
    "PartialFind",
    "Result",
    "SearchOptions",
    "SemanticLocator",
    "SemanticNode",
    "build_failure_message",
    "find_by_semantic_locator",
    "find_element",
    "find_elements",
    "parse_locator",
]
