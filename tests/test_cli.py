from __future__ import annotations

import io
from pathlib import Path

import pytest

from semloc.__main__ import main

PAGE = """
<nav>
  <ul>
    <li><a href="/">Home</a></li>
    <li><a href="/docs" aria-current="page">Docs</a></li>
  </ul>
</nav>
<button hidden>Secret</button>
"""


@pytest.fixture
def page(tmp_path: Path) -> str:
    path = tmp_path / "page.html"
    path.write_text(PAGE)
    return str(path)


def test_text_output(page: str, capsys: pytest.CaptureFixture[str]) -> None:
    main([page, "{navigation} {link}", "--format", "text"])
    assert capsys.readouterr().out == "Home\nDocs\n"


def test_html_output(page: str, capsys: pytest.CaptureFixture[str]) -> None:
    main([page, "{link current:page}"])
    out = capsys.readouterr().out
    assert "<a" in out
    assert "Docs" in out
    assert "Home" not in out


def test_first(page: str, capsys: pytest.CaptureFixture[str]) -> None:
    main([page, "{list} outer {listitem}", "--format", "text", "--first"])
    assert capsys.readouterr().out == "Home\n"


def test_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("<button>From stdin</button>"))
    main(["-", "{button}", "--format", "text"])
    assert capsys.readouterr().out == "From stdin\n"


def test_no_match_exits_1(page: str, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([page, "{button}"])
    assert excinfo.value.code == 1
    assert capsys.readouterr().out == ""


def test_first_explains_failure(page: str, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([page, "{button 'Secret'}", "--first"])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "Didn't find any elements matching semantic locator {button 'Secret'}." in err
    assert "1 hidden element matched the locator." in err


def test_include_hidden(page: str, capsys: pytest.CaptureFixture[str]) -> None:
    main([page, "{button}", "--include-hidden", "--format", "text"])
    assert capsys.readouterr().out == "Secret\n"


def test_invalid_locator_exits_2(page: str, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([page, "{button colour:red}"])
    assert excinfo.value.code == 2
    assert "Unsupported attribute 'colour'" in capsys.readouterr().err


def test_missing_arguments_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
    assert "usage: semloc" in capsys.readouterr().err
