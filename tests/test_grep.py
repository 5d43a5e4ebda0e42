import io

import pytest

from rvkit.grep import grep, main, match


@pytest.mark.parametrize(
    "re, text, expected",
    [
        ("abc", "xxabcxx", True),
        ("^ab", "abc", True),
        ("^bc", "abc", False),
        ("b$", "ab", True),
        ("a$", "ab", False),
        ("a*b", "b", True),
        ("a*b", "aaab", True),
        ("^a.c$", "abc", True),
        ("^a.c$", "abcd", False),
        (".*", "", True),
        ("", "", True),
        ("x", "abc", False),
        ("^$", "", True),
        ("^$", "a", False),
    ],
)
def test_match(re, text, expected):
    assert match(re, text) is expected


def test_grep_writes_matching_lines():
    out = io.StringIO()
    n = grep("foo", io.StringIO("foo\nbar\nfood\n"), out)
    assert out.getvalue() == "foo\nfood\n"
    assert n == 2


def test_grep_ignores_unterminated_last_line():
    out = io.StringIO()
    assert grep("last", io.StringIO("a\nlast"), out) == 0
    assert out.getvalue() == ""


def test_grep_anchor_end_excludes_newline():
    out = io.StringIO()
    grep("o$", io.StringIO("foo\nbar\n"), out)
    assert out.getvalue() == "foo\n"


def test_main_usage(capsys):
    assert main([]) == 1
    assert "usage: grep pattern" in capsys.readouterr().err


def test_main_files(tmp_path, capsys):
    first = tmp_path / "one.txt"
    second = tmp_path / "two.txt"
    first.write_text("apple\nbanana\n")
    second.write_text("grape\npear\n")
    assert main(["ap", str(first), str(second)]) == 0
    assert capsys.readouterr().out == "apple\ngrape\n"


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "missing"
    assert main(["x", str(missing)]) == 1
    assert capsys.readouterr().out == f"grep: cannot open {missing}\n"