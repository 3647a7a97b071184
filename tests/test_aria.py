from __future__ import annotations

import pytest
from conftest import by_id, ids, parse

from semloc.aria import attribute_value, find_by_role, implicit_role, is_hidden, is_hidden_in_tree, role_of


class TestRoles:
    @pytest.mark.parametrize(
        ("html", "role"),
        [
            ("<a id='x' href='/'>Home</a>", "link"),
            ("<a id='x'>Anchor</a>", None),
            ("<button id='x'>Go</button>", "button"),
            ("<input id='x'>", "textbox"),
            ("<input id='x' type='checkbox'>", "checkbox"),
            ("<input id='x' type='submit'>", "button"),
            ("<input id='x' type='range'>", "slider"),
            ("<input id='x' type='text' list='options'>", "combobox"),
            ("<input id='x' type='password'>", None),
            ("<select id='x'><option>A</option></select>", "combobox"),
            ("<select id='x' multiple><option>A</option></select>", "listbox"),
            ("<img id='x' src='a.png' alt='Logo'>", "img"),
            ("<img id='x' src='a.png' alt=''>", None),
            ("<h3 id='x'>Title</h3>", "heading"),
            ("<section id='x'>Untitled</section>", None),
            ("<section id='x' aria-label='News'>Titled</section>", "region"),
            ("<header id='x'>Site</header>", "banner"),
            ("<article><header id='x'>Post</header></article>", None),
            ("<table><tr><th id='x'>Name</th></tr></table>", "columnheader"),
            ("<table><tr><th id='x' scope='row'>Name</th></tr></table>", "rowheader"),
            ("<table><tr><td id='x'>Cell</td></tr></table>", "cell"),
            ("<div id='x'>Plain</div>", None),
        ],
    )
    def test_implicit_role(self, html: str, role: str | None) -> None:
        assert implicit_role(by_id(parse(html), "x")) == role

    def test_explicit_role_wins(self) -> None:
        element = by_id(parse("<div id='x' role='tab button'>Tab</div>"), "x")
        assert role_of(element) == "tab"

    def test_presentational_role(self) -> None:
        element = by_id(parse("<ul id='x' role='presentation'></ul>"), "x")
        assert role_of(element) is None
        assert role_of(element, include_presentational=True) == "list"


class TestVisibility:
    @pytest.mark.parametrize(
        "html",
        [
            "<div id='x' hidden>a</div>",
            "<div id='x' aria-hidden='true'>a</div>",
            "<div id='x' style='color: red; display: none'>a</div>",
            "<div id='x' style='visibility:hidden !important'>a</div>",
            "<input id='x' type='hidden'>",
        ],
    )
    def test_hidden(self, html: str) -> None:
        assert is_hidden(by_id(parse(html), "x"))

    @pytest.mark.parametrize(
        "html",
        [
            "<div id='x'>a</div>",
            "<div id='x' aria-hidden='false'>a</div>",
            "<div id='x' style='display: block'>a</div>",
        ],
    )
    def test_visible(self, html: str) -> None:
        assert not is_hidden(by_id(parse(html), "x"))

    def test_hidden_in_tree_checks_ancestors(self) -> None:
        root = parse("<div hidden><p><span id='x'>deep</span></p></div>")
        element = by_id(root, "x")
        assert not is_hidden(element)
        assert is_hidden_in_tree(element)


class TestFindByRole:
    def test_document_order(self) -> None:
        root = parse("<button id='a'>A</button><div><button id='b'>B</button></div><button id='c'>C</button>")
        assert ids(find_by_role("button", root)) == ["a", "b", "c"]

    def test_skips_hidden_subtrees(self) -> None:
        root = parse("<div hidden><button id='a'>A</button></div><button id='b'>B</button>")
        assert ids(find_by_role("button", root)) == ["b"]
        assert ids(find_by_role("button", root, include_hidden=True)) == ["a", "b"]

    def test_skips_head(self) -> None:
        root = parse("<html><head><title>T</title></head><body><a id='x' href='/'>x</a></body></html>")
        assert ids(find_by_role("link", root)) == ["x"]

    def test_presentational_elements(self) -> None:
        root = parse("<button id='a' role='presentation'>A</button>")
        assert find_by_role("button", root) == []
        assert ids(find_by_role("button", root, include_presentational=True)) == ["a"]

    def test_children_of_presentational_keep_their_role(self) -> None:
        root = parse("<div role='none'><button id='a'>A</button></div>")
        assert ids(find_by_role("button", root)) == ["a"]


class TestAttributeValues:
    def test_checked_native_and_aria(self) -> None:
        root = parse(
            "<input id='on' type='checkbox' checked>"
            "<input id='off' type='radio'>"
            "<div id='mixed' role='checkbox' aria-checked='mixed'></div>"
            "<div id='default' role='switch'></div>"
            "<button id='none'>x</button>"
        )
        assert attribute_value(by_id(root, "on"), "checked") == "true"
        assert attribute_value(by_id(root, "off"), "checked") == "false"
        assert attribute_value(by_id(root, "mixed"), "checked") == "mixed"
        assert attribute_value(by_id(root, "default"), "checked") == "false"
        assert attribute_value(by_id(root, "none"), "checked") is None

    def test_disabled(self) -> None:
        root = parse(
            "<button id='native' disabled>x</button>"
            "<div aria-disabled='true'><div id='inherited' role='button'>y</div></div>"
            "<fieldset disabled><legend><input id='in-legend'></legend><input id='in-fieldset'></fieldset>"
            "<button id='enabled'>z</button>"
        )
        assert attribute_value(by_id(root, "native"), "disabled") == "true"
        assert attribute_value(by_id(root, "inherited"), "disabled") == "true"
        assert attribute_value(by_id(root, "in-fieldset"), "disabled") == "true"
        assert attribute_value(by_id(root, "in-legend"), "disabled") == "false"
        assert attribute_value(by_id(root, "enabled"), "disabled") == "false"

    def test_selected(self) -> None:
        root = parse(
            "<select><option id='a'>A</option><option id='b' selected>B</option></select>"
            "<div role='tab' id='tab' aria-selected='true'>T</div>"
        )
        assert attribute_value(by_id(root, "a"), "selected") == "false"
        assert attribute_value(by_id(root, "b"), "selected") == "true"
        assert attribute_value(by_id(root, "tab"), "selected") == "true"

    def test_expanded_and_pressed(self) -> None:
        root = parse(
            "<button id='menu' aria-expanded='false' aria-pressed='true'>Menu</button>"
            "<details open><summary id='summary'>More</summary>Body</details>"
            "<button id='plain'>Plain</button>"
        )
        assert attribute_value(by_id(root, "menu"), "expanded") == "false"
        assert attribute_value(by_id(root, "menu"), "pressed") == "true"
        assert attribute_value(by_id(root, "summary"), "expanded") == "true"
        assert attribute_value(by_id(root, "plain"), "expanded") is None
        assert attribute_value(by_id(root, "plain"), "pressed") is None

    def test_current(self) -> None:
        root = parse(
            "<a id='page' href='/' aria-current='page'>Home</a>"
            "<a id='odd' href='/' aria-current='yes'>Odd</a>"
            "<a id='plain' href='/'>Plain</a>"
        )
        assert attribute_value(by_id(root, "page"), "current") == "page"
        assert attribute_value(by_id(root, "odd"), "current") == "true"
        assert attribute_value(by_id(root, "plain"), "current") == "false"

    def test_level(self) -> None:
        root = parse(
            "<h4 id='h4'>Four</h4>"
            "<h1 id='override' aria-level='5'>Five</h1>"
            "<div id='aria' role='heading'>Default</div>"
            "<p id='para'>Text</p>"
        )
        assert attribute_value(by_id(root, "h4"), "level") == "4"
        assert attribute_value(by_id(root, "override"), "level") == "5"
        assert attribute_value(by_id(root, "aria"), "level") == "2"
        assert attribute_value(by_id(root, "para"), "level") is None

    def test_unsupported_attribute(self) -> None:
        element = by_id(parse("<button id='x'>x</button>"), "x")
        assert attribute_value(element, "colour") is None
