"""Filter list metadata and classification of filter lines."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class FilterType(enum.Enum):
    """The kind of rule a single filter line holds."""

    NETWORK = "network"
    COSMETIC = "cosmetic"
    NOT_SUPPORTED = "not-supported"


@dataclass
class FilterList:
    """Description of a published filter list."""

    uuid: str
    url: str
    title: str
    langs: list[str] = field(default_factory=list)
    support_url: str = ""
    component_id: str = ""
    base64_public_key: str = ""


_UNSUPPORTED_AFTER_SHARP = ("@$#", "@%#", "%#", "$#", "?#")
_COSMETIC_AFTER_SHARP = ("#", "@#")


def detect_filter_type(filter: str) -> FilterType:
    """Guess whether a line is a network filter, a cosmetic one, or neither."""
    if (
        len(filter.encode("utf-8")) == 1
        or filter.startswith("!")
        or (filter.startswith("#") and filter[1:2].isspace())
        or filter.startswith("[Adblock")
    ):
        return FilterType.NOT_SUPPORTED

    if filter.startswith("|") or filter.startswith("@@|"):
        return FilterType.NETWORK

    # Adguard-only syntax
    if "$$" in filter:
        return FilterType.NOT_SUPPORTED

    sharp = filter.find("#")
    if sharp != -1:
        after = filter[sharp + 1:]
        if after.startswith(_UNSUPPORTED_AFTER_SHARP):
            return FilterType.NOT_SUPPORTED
        if after.startswith(_COSMETIC_AFTER_SHARP):
            return FilterType.COSMETIC

    return FilterType.NETWORK