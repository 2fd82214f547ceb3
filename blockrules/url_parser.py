"""Light-weight URL parsing that extracts the scheme, host and domain.

Only as much of a URL is understood as the filter engine needs: the scheme
is lower-cased, user information is percent-encoded, non-ASCII hosts are
converted to punycode, and everything after the host is lower-cased.
"""

from __future__ import annotations

import enum
import string
from dataclasses import dataclass
from itertools import islice
from typing import Optional

import idna

_C0_CONTROL_OR_SPACE = "".join(chr(code) for code in range(0x21))
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_SCHEME_CHARS = frozenset(string.ascii_lowercase + string.digits + "+-.")
_IGNORED_CHARS = frozenset("\t\n\r")
_USERINFO_ENCODE = frozenset(' "#<>`?{}/:;=@[\\]^|')

_IDNA_ERROR = "invalid international domain name"
_RELATIVE_URL_WITHOUT_BASE = "relative URL without a base"
_FILE_URL_NOT_SUPPORTED = "file URLs are not supported"

# Multi-label public suffixes; any other host uses its last label as suffix.
_PUBLIC_SUFFIXES = frozenset(
    {
        "co.uk", "org.uk", "ac.uk", "gov.uk", "me.uk", "ltd.uk", "plc.uk",
        "net.uk", "sch.uk", "nhs.uk", "police.uk",
        "com.au", "net.au", "org.au", "edu.au", "gov.au", "asn.au", "id.au",
        "co.jp", "ne.jp", "or.jp", "ac.jp", "go.jp", "ad.jp", "ed.jp", "gr.jp",
        "lg.jp",
        "com.br", "net.br", "org.br", "nom.br", "gov.br", "edu.br", "art.br",
        "co.nz", "net.nz", "org.nz", "govt.nz", "ac.nz", "school.nz",
        "co.za", "org.za", "gov.za", "ac.za", "net.za", "web.za",
        "com.cn", "net.cn", "org.cn", "gov.cn", "edu.cn", "ac.cn",
        "com.mx", "org.mx", "gob.mx", "edu.mx", "net.mx",
        "com.tr", "org.tr", "net.tr", "gov.tr", "edu.tr",
        "co.in", "net.in", "org.in", "firm.in", "gen.in", "ind.in", "gov.in",
        "ac.in", "edu.in",
        "co.kr", "or.kr", "ne.kr", "go.kr", "ac.kr", "re.kr",
        "com.sg", "org.sg", "net.sg", "gov.sg", "edu.sg",
        "com.hk", "org.hk", "net.hk", "gov.hk", "edu.hk",
        "com.tw", "org.tw", "net.tw", "gov.tw", "edu.tw",
        "com.ar", "org.ar", "net.ar", "gob.ar", "edu.ar",
        "co.il", "org.il", "net.il", "ac.il", "gov.il",
        "com.sh", "net.sh", "org.sh", "gov.sh", "mil.sh",
        "com.es", "org.es", "nom.es", "gob.es", "edu.es",
        "com.pl", "net.pl", "org.pl", "gov.pl",
        "com.ru", "org.ru", "net.ru", "msk.ru", "spb.ru",
        "com.ua", "org.ua", "net.ua", "gov.ua", "in.ua", "kiev.ua",
        "co.id", "or.id", "web.id", "ac.id", "go.id",
        "com.my", "net.my", "org.my", "gov.my", "edu.my",
        "com.ph", "net.ph", "org.ph", "gov.ph", "edu.ph",
        "com.vn", "net.vn", "org.vn", "gov.vn", "edu.vn",
        "co.th", "in.th", "or.th", "ac.th", "go.th",
        "com.pk", "net.pk", "org.pk", "gov.pk", "edu.pk",
        "com.eg", "org.eg", "gov.eg", "edu.eg",
        "com.sa", "net.sa", "org.sa", "gov.sa", "edu.sa",
        "com.co", "net.co", "org.co", "nom.co", "gov.co",
        "com.pe", "net.pe", "org.pe", "nom.pe", "gob.pe",
        "com.ve", "net.ve", "org.ve", "gob.ve",
        "co.ke", "or.ke", "ne.ke", "go.ke", "ac.ke",
        "com.ng", "org.ng", "net.ng", "gov.ng", "edu.ng",
        "co.at", "or.at", "gv.at", "ac.at",
        "com.gr", "net.gr", "org.gr", "gov.gr", "edu.gr",
        "com.pt", "org.pt", "gov.pt", "edu.pt",
        "co.hu", "org.hu", "info.hu",
        "github.io", "blogspot.com", "appspot.com", "herokuapp.com",
        "cloudfront.net", "azurewebsites.net", "s3.amazonaws.com",
    }
)


class ParseError(ValueError):
    """Raised when a URL cannot be parsed into scheme and host."""


class SchemeType(enum.Enum):
    """How a scheme influences parsing of the rest of the URL."""

    FILE = "file"
    SPECIAL_NOT_FILE = "special"
    NOT_SPECIAL = "not-special"

    @classmethod
    def from_scheme(cls, scheme: str) -> "SchemeType":
        """Classify a lower-case scheme name."""
        if scheme in ("http", "https", "ws", "wss", "ftp", "gopher"):
            return cls.SPECIAL_NOT_FILE
        if scheme == "file":
            return cls.FILE
        return cls.NOT_SPECIAL

    def is_special(self) -> bool:
        """Tell whether the scheme is one of the WHATWG special schemes."""
        return self is not SchemeType.NOT_SPECIAL


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def _percent_encode_userinfo(ch: str) -> str:
    if ch in _USERINFO_ENCODE or not " " < ch < "\x7f":
        return "".join(f"%{byte:02X}" for byte in ch.encode("utf-8"))
    return ch


def _split_scheme(text: str) -> Optional[tuple[str, str]]:
    if not text or not (text[0].isascii() and text[0].isalpha()):
        return None
    scheme = []
    for index, ch in enumerate(text):
        if ch == ":":
            return "".join(scheme), text[index + 1:]
        lowered = _ascii_lower(ch)
        if lowered not in _SCHEME_CHARS:
            return None
        scheme.append(lowered)
    return None


def _parse_userinfo(rest: str, special: bool) -> tuple[str, Optional[int], str]:
    """Return (encoded userinfo, username length or None, remaining input)."""
    last_at = None
    for index, ch in enumerate(rest):
        if ch == "@":
            last_at = index
        elif ch in "/?#" or (ch == "\\" and special):
            break
    if last_at is None:
        return "", None, rest
    remaining = rest[last_at + 1:]
    if last_at == 0:
        return "", None, remaining

    encoded = []
    username_len: Optional[int] = None
    has_username = has_password = False
    chars = (ch for ch in rest if ch not in _IGNORED_CHARS)
    for consumed, ch in enumerate(islice(chars, last_at), start=1):
        left = last_at - consumed
        if ch == ":" and username_len is None:
            username_len = len("".join(encoded))
            if left > 0:
                encoded.append(":")
                has_password = True
        else:
            if not has_password:
                has_username = True
            encoded.append(_percent_encode_userinfo(ch))
    userinfo = "".join(encoded)
    if username_len is None:
        username_len = len(userinfo)
    if has_username or has_password:
        userinfo += "@"
    return userinfo, username_len, remaining


def _parse_host(rest: str, special: bool) -> tuple[str, str]:
    """Return (ASCII host, remaining input)."""
    inside_brackets = False
    has_ignored = False
    non_ignored = 0
    end = len(rest)
    for index, ch in enumerate(rest):
        if (ch == ":" and not inside_brackets) or ch in "/?#" or (
            ch == "\\" and special
        ):
            end = index
            break
        if ch in _IGNORED_CHARS:
            has_ignored = True
            continue
        if ch == "[":
            inside_brackets = True
        elif ch == "]":
            inside_brackets = False
        non_ignored += 1
    host = rest[:non_ignored] if has_ignored else rest[:end]
    if not host.isascii():
        try:
            host = idna.encode(
                host, uts46=True, std3_rules=True, transitional=True
            ).decode("ascii")
        except UnicodeError as exc:
            raise ParseError(_IDNA_ERROR) from exc
    return host, rest[end:]


@dataclass(frozen=True)
class Hostname:
    """A normalised URL with the positions of its scheme and host."""

    serialization: str
    scheme_end: int
    username_end: int
    host_start: int
    host_end: int

    @classmethod
    def parse(cls, input: str) -> "Hostname":
        """Parse ``input``, raising :class:`ParseError` on failure."""
        text = input.strip(_C0_CONTROL_OR_SPACE)
        split = _split_scheme(text)
        if split is None:
            raise ParseError(_RELATIVE_URL_WITHOUT_BASE)
        scheme, rest = split
        scheme_type = SchemeType.from_scheme(scheme)
        serialization = scheme + ":"

        if scheme_type is SchemeType.FILE:
            raise ParseError(_FILE_URL_NOT_SUPPORTED)
        if scheme_type is SchemeType.SPECIAL_NOT_FILE:
            rest = rest.lstrip("/\\")
        elif rest.startswith("//"):
            rest = rest[2:]
        else:
            end = len(serialization)
            return cls(
                serialization=serialization + _ascii_lower(rest),
                scheme_end=len(scheme),
                username_end=end,
                host_start=end,
                host_end=end,
            )

        serialization += "//"
        special = scheme_type.is_special()
        userinfo, username_len, rest = _parse_userinfo(rest, special)
        username_end = len(serialization) + (
            username_len if username_len is not None else 0
        )
        serialization += userinfo
        host_start = len(serialization)
        host, rest = _parse_host(rest, special)
        serialization += host
        host_end = len(serialization)
        return cls(
            serialization=serialization + _ascii_lower(rest),
            scheme_end=len(scheme),
            username_end=username_end,
            host_start=host_start,
            host_end=host_end,
        )

    def host_str(self) -> Optional[str]:
        """Return the host (punycode for non-ASCII names), or None."""
        if self.host_end > self.host_start:
            return self.serialization[self.host_start:self.host_end]
        return None

    def url_str(self) -> str:
        """Return the normalised URL."""
        return self.serialization


@dataclass(frozen=True)
class RequestUrl:
    """A parsed URL with its host and registrable domain located."""

    url: str
    schema_end: int
    hostname_pos: tuple[int, int]
    domain_pos: tuple[int, int]

    def schema(self) -> str:
        """Return the lower-case scheme."""
        return self.url[:self.schema_end]

    def hostname(self) -> str:
        """Return the host part."""
        start, end = self.hostname_pos
        return self.url[start:end]

    def domain(self) -> str:
        """Return the registrable domain of the host."""
        host_start = self.hostname_pos[0]
        start, end = self.domain_pos
        return self.url[host_start + start:host_start + end]


def parse_url(url: str) -> Optional[RequestUrl]:
    """Parse ``url`` into a :class:`RequestUrl`, or None if it has no host."""
    try:
        parsed = Hostname.parse(url)
    except ParseError:
        return None
    host = parsed.host_str()
    if host is None:
        return None
    return RequestUrl(
        url=parsed.url_str(),
        schema_end=parsed.scheme_end,
        hostname_pos=(parsed.host_start, parsed.host_end),
        domain_pos=get_host_domain(host),
    )


def _domain_labels(name: str) -> Optional[list[str]]:
    if not name or len(name) > 253:
        return None
    labels = name.split(".")
    allowed = set(string.ascii_letters + string.digits + "-_")
    for label in labels:
        if not 0 < len(label) <= 63 or not set(label) <= allowed:
            return None
        if label.startswith("-") or label.endswith("-"):
            return None
    if labels[-1].isdigit():
        return None
    return labels


def get_host_domain(host: str) -> tuple[int, int]:
    """Return the (start, end) of the registrable domain within ``host``.

    Hosts that are not valid domain names, such as IP addresses, span
    the whole host. Public suffixes come from a built-in table.
    """
    if not host:
        return (0, 0)
    trailing_dot = host.endswith(".")
    labels = _domain_labels(host[:-1] if trailing_dot else host)
    if labels is None:
        return (0, len(host))
    lowered = [label.lower() for label in labels]
    suffix_len = max(
        (
            count
            for count in range(2, len(lowered) + 1)
            if ".".join(lowered[-count:]) in _PUBLIC_SUFFIXES
        ),
        default=1,
    )
    if len(labels) <= suffix_len:
        return (0, len(host))
    root_len = len(".".join(labels[-(suffix_len + 1):])) + int(trailing_dot)
    return (len(host) - root_len, len(host))