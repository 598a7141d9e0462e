import io

from hypothesis import given
from hypothesis import strategies as st

from rvsix.coreutils import (
    WordCount,
    atoi,
    cat,
    cat_main,
    echo,
    echo_main,
    gets,
    strcmp,
    wc,
    wc_main,
)


def test_atoi_reads_leading_digits():
    assert atoi("123abc") == 123
    assert atoi("-5") == 0
    assert atoi("") == 0


@given(st.integers(min_value=0, max_value=10**12))
def test_atoi_round_trip(n):
    assert atoi(str(n)) == n


def test_strcmp_ordering():
    assert strcmp("abc", "abc") == 0
    assert strcmp("abc", "abd") < 0
    assert strcmp("b", "a") > 0
    assert strcmp("ab", "abc") < 0
    assert strcmp("abc", "ab") == ord("c")


@given(st.text(alphabet="abcxyz", max_size=8), st.text(alphabet="abcxyz", max_size=8))
def test_strcmp_antisymmetric(p, q):
    assert strcmp(p, q) == -strcmp(q, p)
    assert (strcmp(p, q) == 0) == (p == q)


def test_gets_reads_line_with_terminator():
    stream = io.StringIO("hello\nworld")
    assert gets(stream, 100) == "hello\n"
    assert gets(stream, 100) == "world"
    assert gets(stream, 100) == ""


def test_gets_limits_and_carriage_return():
    assert gets(io.StringIO("hello\n"), 4) == "hel"
    assert gets(io.StringIO("ab\rcd"), 100) == "ab\r"


def test_cat_copies_everything():
    data = bytes(range(256)) * 5
    out = io.BytesIO()
    cat(io.BytesIO(data), out)
    assert out.getvalue() == data


def test_echo():
    assert echo(["a", "b"]) == "a b\n"
    assert echo([]) == ""


def test_wc_counts():
    data = b"one two\nthree\n"
    assert wc(io.BytesIO(data)) == WordCount(data.count(b"\n"), 3, len(data))


def test_wc_nul_separates_words():
    assert wc(io.BytesIO(b"a\0b")).words == 2


@given(st.binary().map(lambda b: bytes(b"ab \n\t"[x % 5] for x in b)))
def test_wc_invariants(data):
    count = wc(io.BytesIO(data))
    assert count.chars == len(data)
    assert count.lines == data.count(b"\n")
    assert count.words == len(data.split())


def test_cat_main_files(tmp_path, capsysbinary):
    first = tmp_path / "a"
    second = tmp_path / "b"
    first.write_bytes(b"first\n")
    second.write_bytes(b"second\n")
    assert cat_main([str(first), str(second)]) == 0
    assert capsysbinary.readouterr().out == b"first\nsecond\n"


def test_cat_main_missing(tmp_path, capsys):
    missing = tmp_path / "none"
    assert cat_main([str(missing)]) == 1
    assert capsys.readouterr().err == f"cat: cannot open {missing}\n"


def test_echo_main(capsys):
    assert echo_main(["hi", "there"]) == 0
    assert capsys.readouterr().out == "hi there\n"


def test_wc_main(tmp_path, capsys):
    path = tmp_path / "f"
    data = b"x y\n"
    path.write_bytes(data)
    assert wc_main([str(path)]) == 0
    assert capsys.readouterr().out == f"1 2 {len(data)} {path}\n"


def test_wc_main_missing(tmp_path, capsys):
    missing = tmp_path / "none"
    assert wc_main([str(missing)]) == 1
    assert capsys.readouterr().out == f"wc: cannot open {missing}\n"