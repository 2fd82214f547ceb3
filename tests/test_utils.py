import pytest

from blockrules.utils import (
    bin_lookup,
    bin_lookup_optional,
    bin_search,
    create_combined_fuzzy_signature,
    create_fuzzy_signature,
    fast_hash,
    has_unicode,
    read_file_lines,
    rules_from_lists,
    tokenize,
    tokenize_filter,
    tokenize_hostnames,
)


def t(tokens):
    return [fast_hash(token) for token in tokens]


def test_fast_hash_is_deterministic_and_64_bit():
    assert fast_hash("hello world") == fast_hash("hello world")
    assert 0 <= fast_hash("hello world") < 2**64
    assert fast_hash("hello world"[1:10]) == fast_hash("ello worl")
    assert fast_hash("hello world"[1:5]) == fast_hash("ello")


def test_fast_hash_distinguishes_inputs():
    values = {fast_hash(s) for s in ["", "a", "b", "ab", "ba", "abcdefgh", "abcdefghi"]}
    assert len(values) == 7


@pytest.mark.parametrize("skip_first", [False, True])
@pytest.mark.parametrize("skip_last", [False, True])
def test_tokenize_filter_empty(skip_first, skip_last):
    assert tokenize_filter("", skip_first, skip_last) == []


def test_tokenize_filter_works():
    assert tokenize_filter("foo/bar baz", False, False) == t(["foo", "bar", "baz"])
    assert tokenize_filter("foo/bar baz", True, False) == t(["bar", "baz"])
    assert tokenize_filter("foo/bar baz", True, True) == t(["bar"])
    assert tokenize_filter("foo/bar baz", False, True) == t(["foo", "bar"])
    assert tokenize_filter("foo////bar baz", False, True) == t(["foo", "bar"])


def test_tokenize_host_works():
    assert tokenize_hostnames("") == []
    assert tokenize_hostnames("foo") == t(["foo"])
    assert tokenize_hostnames("foo/bar") == t(["foo", "bar"])
    assert tokenize_hostnames("foo-barbaz/bar") == t(["foo-barbaz", "bar"])
    assert tokenize_hostnames("foo_barbaz/ba%r") == t(["foo_barbaz", "ba%r"])
    assert tokenize_hostnames("foo_barbaz/ba%r*") == t(["foo_barbaz", "ba%r"])
    assert tokenize_hostnames("foo_barbaz///ba%r*") == t(["foo_barbaz", "ba%r"])


def test_tokenize_works():
    assert tokenize("") == []
    assert tokenize("foo") == t(["foo"])
    assert tokenize("foo/bar") == t(["foo", "bar"])
    assert tokenize("foo-bar") == t(["foo", "bar"])
    assert tokenize("foo.bar") == t(["foo", "bar"])
    assert tokenize("foo.barƬ") == t(["foo", "barƬ"])
    assert tokenize("foo.barƬ*") == t(["foo"])
    assert tokenize("*foo.barƬ") == t(["barƬ"])
    assert tokenize("*foo.barƬ*") == []


def test_tokenize_skips_single_char_tokens():
    assert tokenize("a/bc/d") == t(["bc"])


def test_tokenize_caps_token_count():
    tokens = tokenize(" ".join(["ab"] * 300))
    assert 127 <= len(tokens) <= 128


def test_create_fuzzy_signature_works():
    assert create_fuzzy_signature("") == []
    tokens = sorted(t(["bar", "foo"]))
    assert create_fuzzy_signature("foo bar") == tokens
    assert create_fuzzy_signature("bar foo") == tokens
    assert create_fuzzy_signature("foo bar foo foo") == tokens


def test_create_combined_fuzzy_signature():
    expected = sorted(t(["bar", "baz", "foo"]))
    assert create_combined_fuzzy_signature(["foo bar", "baz foo"]) == expected
    assert create_combined_fuzzy_signature([]) == []


def test_bin_lookup_works():
    assert bin_lookup([], 42) is False
    assert bin_lookup([42], 42) is True
    assert bin_lookup([1, 2, 3, 4, 42], 42) is True
    assert bin_lookup([1, 2, 3, 4, 42], 1) is True
    assert bin_lookup([1, 2, 3, 4, 42], 3) is True
    assert bin_lookup([1, 2, 3, 4, 42], 43) is False
    assert bin_lookup([1, 2, 3, 4, 42], 0) is False
    assert bin_lookup([1, 2, 3, 4, 42], 5) is False


def test_bin_lookup_optional():
    assert bin_lookup_optional([1, 2, 3], None) is False
    assert bin_lookup_optional([1, 2, 3], 2) is True
    assert bin_lookup_optional([1, 2, 3], 7) is False


def test_bin_search_works():
    assert bin_search([], 42) is None
    assert bin_search([1], 42) is None
    assert bin_search([42], 42) == 0
    assert bin_search([0, 1], 42) is None
    assert bin_search([1, 42], 42) == 1
    assert bin_search([42, 45], 42) == 0
    assert bin_search([42, 42], 42) in (0, 1)

    data = [x * x for x in range(1, 1001)]
    assert bin_search(data, 42) is None
    assert bin_search(data, 1) == 0
    assert bin_search(data, 4) == 1
    assert bin_search(data, 1000 * 1000) == 999


@pytest.mark.parametrize(
    "text",
    [
        "｡◕ ∀ ◕｡)",
        "｀ｨ(´∀｀∩",
        "__ﾛ(,_,*)",
        "・(￣∀￣)・:*:",
        "ﾟ･✿ヾ╲(｡◕‿◕｡)╱✿･ﾟ",
        ",。・:*:・゜’( ☻ ω ☻ )。・:*:・゜’",
        "(╯°□°）╯︵ ┻━┻)",
        "(ﾉಥ益ಥ）ﾉ ┻━┻",
        "┬─┬ノ( º _ ºノ)",
        "( ͡° ͜ʖ ͡°)",
        "¯_(ツ)_/¯",
    ],
)
def test_has_unicode_detects_non_ascii(text):
    assert has_unicode(text) is True


def test_has_unicode_ascii():
    ascii_text = "".join(chr(c) for c in range(ord("!"), ord("~") + 1))
    assert has_unicode(ascii_text) is False


def test_read_file_lines_strips_line_endings(tmp_path):
    path = tmp_path / "list.txt"
    path.write_bytes(b"one\r\ntwo\nthree")
    assert read_file_lines(str(path)) == ["one", "two", "three"]


def test_read_file_lines_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_file_lines(str(tmp_path / "missing.txt"))


def test_rules_from_lists_concatenates(tmp_path):
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_text("||ads.example.com^\n/banner/*\n", encoding="utf-8")
    second.write_text("@@||example.com\n", encoding="utf-8")
    assert rules_from_lists([str(first), str(second)]) == [
        "||ads.example.com^",
        "/banner/*",
        "@@||example.com",
    ]