"""Hashing, tokenizing and small lookup helpers shared by the filter engine."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Callable, Iterable, Sequence
from typing import Optional, TypeVar

Hash = int

HASH_MAX: Hash = (1 << 64) - 1
TOKENS_BUFFER_SIZE = 128
TOKENS_BUFFER_RESERVED = 1
TOKENS_MAX = TOKENS_BUFFER_SIZE - TOKENS_BUFFER_RESERVED

_MASK64 = HASH_MAX
_SEED = (
    0x16F11FE89B0D677C,
    0xB480A793D8E6C86C,
    0x6FE2E5AAF078EBC9,
    0x14F994A4C5259381,
)
_DIFFUSE_PRIME = 0x6EED0E9DA4D94A4F

T = TypeVar("T")


def _diffuse(x: int) -> int:
    x = (x * _DIFFUSE_PRIME) & _MASK64
    x ^= (x >> 32) >> (x >> 60)
    return (x * _DIFFUSE_PRIME) & _MASK64


def fast_hash(input: str) -> Hash:
    """Return the 64-bit SeaHash of the UTF-8 bytes of ``input``."""
    data = input.encode("utf-8")
    lanes = list(_SEED)
    for offset in range(0, len(data), 8):
        word = int.from_bytes(data[offset:offset + 8], "little")
        mixed = _diffuse(lanes[0] ^ word)
        lanes = [lanes[1], lanes[2], lanes[3], mixed]
    a, b, c, d = lanes
    return _diffuse(a ^ b ^ c ^ d ^ len(data))


def _is_allowed_filter(ch: str) -> bool:
    return ch.isalnum() or ch == "%"


def _is_allowed_hostname(ch: str) -> bool:
    return _is_allowed_filter(ch) or ch in "_-"


def _byte_indexed(pattern: str) -> Iterable[tuple[int, str]]:
    """Yield (utf-8 byte offset, char) pairs."""
    position = 0
    for ch in pattern:
        yield position, ch
        position += len(ch.encode("utf-8"))


def _hash_bytes(data: bytes) -> Hash:
    return fast_hash(data.decode("utf-8"))


def _fast_tokenizer_no_regex(
    pattern: str,
    is_allowed: Callable[[str], bool],
    skip_first_token: bool,
    skip_last_token: bool,
) -> list[Hash]:
    encoded = pattern.encode("utf-8")
    tokens: list[Hash] = []
    inside = False
    start = 0
    preceding: Optional[str] = None

    for i, ch in _byte_indexed(pattern):
        if len(tokens) >= TOKENS_MAX:
            break
        if is_allowed(ch):
            if not inside:
                inside = True
                start = i
        elif inside:
            inside = False
            if (
                (not skip_first_token or start != 0)
                and i - start > 1
                and ch != "*"
                and preceding != "*"
            ):
                tokens.append(_hash_bytes(encoded[start:i]))
            preceding = ch
        else:
            preceding = ch

    if (
        not skip_last_token
        and inside
        and len(encoded) - start > 1
        and preceding != "*"
    ):
        tokens.append(_hash_bytes(encoded[start:]))
    return tokens


def _fast_tokenizer(pattern: str, is_allowed: Callable[[str], bool]) -> list[Hash]:
    encoded = pattern.encode("utf-8")
    tokens: list[Hash] = []
    inside = False
    start = 0

    for i, ch in _byte_indexed(pattern):
        if len(tokens) >= TOKENS_MAX:
            break
        if is_allowed(ch):
            if not inside:
                inside = True
                start = i
        elif inside:
            inside = False
            tokens.append(_hash_bytes(encoded[start:i]))

    if inside:
        tokens.append(_hash_bytes(encoded[start:]))
    return tokens


def tokenize(pattern: str) -> list[Hash]:
    """Hash the tokens of a URL or pattern, skipping ones touching a ``*``."""
    return _fast_tokenizer_no_regex(pattern, _is_allowed_filter, False, False)


def tokenize_filter(
    pattern: str, skip_first_token: bool, skip_last_token: bool
) -> list[Hash]:
    """Tokenize a filter pattern, optionally dropping the first/last token."""
    return _fast_tokenizer_no_regex(
        pattern, _is_allowed_filter, skip_first_token, skip_last_token
    )


def tokenize_hostnames(pattern: str) -> list[Hash]:
    """Tokenize hostnames, where ``_`` and ``-`` are part of a token."""
    return _fast_tokenizer(pattern, _is_allowed_hostname)


def create_fuzzy_signature(pattern: str) -> list[Hash]:
    """Return the sorted, de-duplicated token hashes of ``pattern``."""
    return sorted(set(_fast_tokenizer(pattern, _is_allowed_filter)))


def create_combined_fuzzy_signature(patterns: Iterable[str]) -> list[Hash]:
    """Return the sorted, de-duplicated token hashes of all ``patterns``."""
    return sorted(
        {
            token
            for pattern in patterns
            for token in _fast_tokenizer(pattern, _is_allowed_filter)
        }
    )


def bin_search(arr: Sequence[T], elt: T) -> Optional[int]:
    """Return an index of ``elt`` in the sorted ``arr``, or None."""
    index = bisect_left(arr, elt)
    if index < len(arr) and arr[index] == elt:
        return index
    return None


def bin_lookup(arr: Sequence[T], elt: T) -> bool:
    """Tell whether ``elt`` is in the sorted ``arr``."""
    return bin_search(arr, elt) is not None


def bin_lookup_optional(arr: Sequence[T], elt: Optional[T]) -> bool:
    """Like :func:`bin_lookup`, but a missing element is never found."""
    return elt is not None and bin_lookup(arr, elt)


def has_unicode(pattern: str) -> bool:
    """Tell whether ``pattern`` holds any non-ASCII character."""
    return not pattern.isascii()


def read_file_lines(filename: str) -> list[str]:
    """Read a UTF-8 text file into a list of lines without line endings."""
    lines: list[str] = []
    with open(filename, encoding="utf-8", newline="") as handle:
        for line in handle:
            if line.endswith("\n"):
                line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
            lines.append(line)
    return lines


def rules_from_lists(lists: Iterable[str]) -> list[str]:
    """Concatenate the lines of every file in ``lists``."""
    return [line for filename in lists for line in read_file_lines(filename)]