# blockrules

Building blocks for an ad-block style request filter.

- `blockrules.utils`: the 64-bit `fast_hash` string hash, the tokenizers `tokenize`, `tokenize_filter` and `tokenize_hostnames`, the fuzzy signatures `create_fuzzy_signature` and `create_combined_fuzzy_signature`, the sorted-sequence lookups `bin_search`, `bin_lookup` and `bin_lookup_optional`, `has_unicode`, and `read_file_lines` / `rules_from_lists` for reading filter list files.
- `blockrules.resources`: `Resources.parse` reads blank-line separated redirect resources into `Resource` entries with a content type and data.
- `blockrules.url_parser`: `parse_url` and `Hostname.parse`. They find the scheme, host and registrable domain of a URL and punycode-encode international hosts. `get_host_domain` locates the registrable domain within a host.
- `blockrules.regex_url_parser`: `get_hostname_regex`, `get_url_host` and `parse_url_regex`, a host extractor based on a regular expression. It is an alternative to `url_parser`.
- `blockrules.lists`: `detect_filter_type`, which sorts filter list lines into network filters, cosmetic filters and unsupported lines. It also has the `FilterList` record that describes a published list.
- `blockrules.request`: `Request`, the normalised view of a network request. It carries the request type, first/third-party status, the hashed source host names and the URL tokens.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install ".[test]"
```

## Usage

```python
from blockrules.request import Request, RequestType

req = Request.from_urls(
    "https://subdomain.example.com/ad",
    "https://example.com/",
    "document",
)
assert req.request_type is RequestType.DOCUMENT
assert req.hostname == "subdomain.example.com"
assert req.is_third_party is False
print(req.url_after_hostname())        # "/ad"
print(req.get_fuzzy_signature())       # sorted, de-duplicated token hashes
```

`Request.from_urls` raises `RequestError` (a `ValueError`) when the URL has no host it can parse. `Request.from_urls_with_hostname` builds a request from hosts you already know, and accepts an explicit third-party flag.

Parsing a URL directly:

```python
from blockrules.url_parser import parse_url

parsed = parse_url("http://example.foo.nom.br:8080/hello")
print(parsed.schema(), parsed.hostname(), parsed.domain())
# http example.foo.nom.br foo.nom.br
```

`parse_url` returns `None` when the URL has no host. `Hostname.parse` raises `ParseError` for relative URLs, for `file:` URLs and for invalid international domain names.

Classifying filter list lines:

```python
from blockrules.lists import FilterType, detect_filter_type

assert detect_filter_type("||ads.example.com^") is FilterType.NETWORK
assert detect_filter_type("example.com##.banner") is FilterType.COSMETIC
assert detect_filter_type("! comment") is FilterType.NOT_SUPPORTED
```

Loading redirect resources:

```python
from blockrules.resources import Resources

resources = Resources.parse("noopjs application/javascript\n(function() {})()")
print(resources.get_resource("noopjs"))
```

## Limitations

- Registrable domains come from a small built-in table of public suffixes, not from the full Public Suffix List. Suffixes missing from the table are treated as single-label.
- The package classifies filter lines but does not parse them into network or cosmetic filter objects.
- It has no blocking engine. Nothing here matches a `Request` against filters or decides whether a request is blocked, redirected or allowed.
- It cannot save or load a compiled set of filters.

## Running the tests

```
pytest
```