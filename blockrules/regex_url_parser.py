"""Regex-based host extraction, an alternative to the full URL parser."""

from __future__ import annotations

import re
from typing import Optional

import idna

from blockrules.url_parser import RequestUrl, get_host_domain

_HOST_RE = re.compile(
    r"(?P<scheme>[a-z][a-z0-9+\-.]*)://"
    r"(?:[a-z0-9\-._~%!$&'()*+,;=]+@)?"
    r"(?P<host>[\w\-.~%]+"
    r"|\[[a-f0-9:.]+\]"
    r"|\[v[a-f0-9][a-z0-9\-._~%!$&'()*+,;=:]+\])"
)


def get_hostname_regex(url: str) -> Optional[tuple[int, tuple[int, int]]]:
    """Return (scheme end, (host start, host end)) for ``url``, or None."""
    match = _HOST_RE.search(url)
    if match is None:
        return None
    return match.end("scheme"), (match.start("host"), match.end("host"))


def get_url_host(url: str) -> Optional[tuple[str, int, tuple[int, int]]]:
    """Return (normalised url, scheme end, host span), or None.

    Non-ASCII hosts are converted to punycode and the URL is rebuilt
    around the converted host.
    """
    found = get_hostname_regex(url)
    if found is None:
        return None
    schema_end, (host_start, host_end) = found
    host = url[host_start:host_end]
    if host.isascii():
        return url, schema_end, (host_start, host_end)
    try:
        encoded = idna.encode(
            host, uts46=True, std3_rules=True, transitional=True
        ).decode("ascii")
    except UnicodeError:
        return None
    normalised = f"{url[:schema_end]}://{encoded}{url[host_end:]}"
    return normalised, schema_end, (host_start, host_start + len(encoded))


def parse_url_regex(url: str) -> Optional[RequestUrl]:
    """Parse ``url`` into a :class:`RequestUrl` using the host regex."""
    parsed = get_url_host(url)
    if parsed is None:
        return None
    normalised, schema_end, (host_start, host_end) = parsed
    return RequestUrl(
        url=normalised,
        schema_end=schema_end,
        hostname_pos=(host_start, host_end),
        domain_pos=get_host_domain(normalised[host_start:host_end]),
    )