"""Network requests as seen by the filter engine."""

from __future__ import annotations

import enum
import string
from dataclasses import dataclass, field
from typing import Optional

from blockrules import utils
from blockrules.url_parser import get_host_domain, parse_url

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


class RequestType(enum.Enum):
    """The resource type of a request."""

    BEACON = "beacon"
    CSP = "csp"
    DOCUMENT = "document"
    DTD = "dtd"
    FETCH = "fetch"
    FONT = "font"
    IMAGE = "image"
    MEDIA = "media"
    OBJECT = "object"
    OTHER = "other"
    PING = "ping"
    SCRIPT = "script"
    STYLESHEET = "stylesheet"
    SUBDOCUMENT = "subdocument"
    WEBSOCKET = "websocket"
    XLST = "xlst"
    XMLHTTPREQUEST = "xmlhttprequest"


class RequestError(ValueError):
    """Raised when a request cannot be built from the given URLs."""


_CPT_TYPES = {
    "beacon": RequestType.PING,
    "csp_report": RequestType.CSP,
    "document": RequestType.DOCUMENT,
    "font": RequestType.FONT,
    "image": RequestType.IMAGE,
    "imageset": RequestType.IMAGE,
    "main_frame": RequestType.DOCUMENT,
    "media": RequestType.MEDIA,
    "object": RequestType.OBJECT,
    "object_subrequest": RequestType.OBJECT,
    "other": RequestType.OTHER,
    "ping": RequestType.PING,
    "script": RequestType.SCRIPT,
    "speculative": RequestType.OTHER,
    "stylesheet": RequestType.STYLESHEET,
    "sub_frame": RequestType.SUBDOCUMENT,
    "web_manifest": RequestType.OTHER,
    "websocket": RequestType.WEBSOCKET,
    "xbl": RequestType.OTHER,
    "xhr": RequestType.XMLHTTPREQUEST,
    "xml_dtd": RequestType.OTHER,
    "xmlhttprequest": RequestType.XMLHTTPREQUEST,
    "xslt": RequestType.OTHER,
}


def cpt_match_type(cpt: str) -> RequestType:
    """Map a browser content-policy type name to a :class:`RequestType`."""
    return _CPT_TYPES.get(cpt, RequestType.OTHER)


def _third_party(source_domain: str, domain: str) -> Optional[bool]:
    if not source_domain:
        return None
    return source_domain != domain


@dataclass
class Request:
    """A single network request with the data needed for matching."""

    request_type: RequestType
    is_http: bool
    is_https: bool
    is_supported: bool
    is_first_party: Optional[bool]
    is_third_party: Optional[bool]
    url: str
    hostname: str
    source_hostname_hashes: Optional[list[int]]
    tokens: list[int]
    hostname_end: int
    bug: Optional[int] = None
    _fuzzy_signature: Optional[list[int]] = field(
        default=None, init=False, repr=False, compare=False
    )

    def url_after_hostname(self) -> str:
        """Return the part of the URL that follows the host."""
        return self.url[self.hostname_end:]

    def get_fuzzy_signature(self) -> list[int]:
        """Return the sorted unique token hashes of the URL, computed once."""
        if self._fuzzy_signature is None:
            self._fuzzy_signature = utils.create_fuzzy_signature(self.url)
        return list(self._fuzzy_signature)

    @classmethod
    def new(
        cls,
        raw_type: str,
        url: str,
        schema: str,
        hostname: str,
        domain: str,
        source_hostname: str,
        source_domain: str,
    ) -> "Request":
        """Build a request from already-parsed URL components."""
        found = url.find(hostname)
        hostname_end = (found if found != -1 else len(url)) + len(hostname)
        return cls._from_detailed_parameters(
            raw_type,
            url,
            schema,
            hostname,
            source_hostname,
            source_domain,
            _third_party(source_domain, domain),
            hostname_end,
        )

    @classmethod
    def _from_detailed_parameters(
        cls,
        raw_type: str,
        url: str,
        schema: str,
        hostname: str,
        source_hostname: str,
        source_domain: str,
        third_party: Optional[bool],
        hostname_end: int,
    ) -> "Request":
        first_party = None if third_party is None else not third_party

        if not schema:
            # No scheme given: assume https
            is_http, is_https, is_supported = False, True, True
            request_type = cpt_match_type(raw_type)
        else:
            is_http = schema == "http"
            is_https = not is_http and schema == "https"
            is_websocket = not is_http and not is_https and schema in ("ws", "wss")
            is_supported = is_http or is_https or is_websocket
            request_type = (
                RequestType.WEBSOCKET if is_websocket else cpt_match_type(raw_type)
            )

        source_hostname_hashes: Optional[list[int]] = None
        if source_hostname:
            prefix = source_hostname[: len(source_hostname) - len(source_domain)]
            source_hostname_hashes = [utils.fast_hash(source_hostname)]
            source_hostname_hashes.extend(
                utils.fast_hash(source_hostname[i + 1:])
                for i, ch in enumerate(prefix)
                if ch == "."
            )

        # The zero token is the fallback into the wildcard rule bucket.
        tokens = utils.tokenize(url) + [0]

        return cls(
            request_type=request_type,
            is_http=is_http,
            is_https=is_https,
            is_supported=is_supported,
            is_first_party=first_party,
            is_third_party=third_party,
            url=url,
            hostname=hostname,
            source_hostname_hashes=source_hostname_hashes,
            tokens=tokens,
            hostname_end=hostname_end,
        )

    @classmethod
    def from_urls(cls, url: str, source_url: str, request_type: str) -> "Request":
        """Parse ``url`` and ``source_url`` into a request.

        Raises :class:`RequestError` if ``url`` has no parsable host. An
        unparsable source URL is treated as absent.
        """
        parsed_url = parse_url(url)
        if parsed_url is None:
            raise RequestError(f"cannot parse hostname of {url!r}")
        parsed_source = parse_url(source_url)
        hostname_end = parsed_url.hostname_pos[1]
        if parsed_source is None:
            return cls._from_detailed_parameters(
                request_type,
                parsed_url.url,
                parsed_url.schema(),
                parsed_url.hostname(),
                "",
                "",
                None,
                hostname_end,
            )
        source_domain = parsed_source.domain()
        return cls._from_detailed_parameters(
            request_type,
            parsed_url.url,
            parsed_url.schema(),
            parsed_url.hostname(),
            parsed_source.hostname(),
            source_domain,
            _third_party(source_domain, parsed_url.domain()),
            hostname_end,
        )

    @classmethod
    def from_urls_with_hostname(
        cls,
        url: str,
        hostname: str,
        source_hostname: str,
        request_type: str,
        third_party_request: Optional[bool],
    ) -> "Request":
        """Build a request from a URL whose hosts are already known.

        Third-partiness is taken from ``third_party_request`` when given,
        and otherwise derived from the two hosts' domains.
        """
        url_norm = url.translate(_ASCII_LOWER)
        start, end = get_host_domain(source_hostname)
        source_domain = source_hostname[start:end]

        splitter = url_norm.find(":")
        if splitter == -1:
            splitter = 0
        schema = url[:splitter]

        if third_party_request is None:
            d_start, d_end = get_host_domain(hostname)
            third_party = _third_party(source_domain, hostname[d_start:d_end])
        else:
            third_party = third_party_request

        return cls._from_detailed_parameters(
            request_type,
            url_norm,
            schema,
            hostname,
            source_hostname,
            source_domain,
            third_party,
            splitter + 2 + len(hostname),
        )

    @classmethod
    def from_url(cls, url: str) -> "Request":
        """Parse ``url`` with no source URL and the default request type."""
        return cls.from_urls(url, "", "")