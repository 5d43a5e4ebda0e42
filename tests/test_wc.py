import io

import pytest

from rvkit.wc import count, main, wc


def test_count_simple():
    data = b"hello world\nfoo\n"
    counts = count(io.BytesIO(data))
    assert counts.lines == data.count(b"\n")
    assert counts.words == 3
    assert counts.chars == len(data)


def test_count_empty():
    assert tuple(count(io.BytesIO(b""))) == (0, 0, 0)


def test_nul_separates_words():
    assert count(io.BytesIO(b"a\0b")).words == 2


@pytest.mark.parametrize(
    "data",
    [b"one two  three", b"  lead\ttab\r\nend ", b"x" * 1500 + b" y", b"\n\n\n"],
)
def test_words_agree_with_split(data):
    counts = count(io.BytesIO(data))
    assert counts.words == len(data.split())
    assert counts.chars == len(data)


def test_word_across_chunk_boundary_counted_once():
    data = b"a" * 511 + b"bc d"
    assert count(io.BytesIO(data)).words == 2


def test_wc_output_line():
    out = io.StringIO()
    data = b"a b\nc\n"
    counts = wc(io.BytesIO(data), "name", out)
    assert out.getvalue() == f"{counts.lines} {counts.words} {counts.chars} name\n"


def test_main_file(tmp_path, capsys):
    path = tmp_path / "f.txt"
    data = b"alpha beta\ngamma\n"
    path.write_bytes(data)
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out == f"2 3 {len(data)} {path}\n"


def test_main_missing(tmp_path, capsys):
    missing = tmp_path / "nope"
    assert main([str(missing)]) == 1
    assert capsys.readouterr().out == f"wc: cannot open {missing}\n"