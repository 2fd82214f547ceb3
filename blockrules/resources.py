"""Redirect resources: named payloads with a content type."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

_COMMENTS_RE = re.compile(r"^\s*#.*$", re.MULTILINE)


@dataclass
class Resource:
    """A single redirect payload."""

    content_type: str
    data: str


@dataclass
class Resources:
    """A mapping from resource name to :class:`Resource`."""

    resources: dict[str, Resource] = field(default_factory=dict)

    @classmethod
    def parse(cls, data: str) -> "Resources":
        """Parse blank-line separated resource blocks.

        Each block starts with ``name content-type`` on its first line,
        followed by the body. Lines starting with ``#`` are comments and
        malformed blocks are skipped.
        """
        resources: dict[str, Resource] = {}
        for chunk in data.split("\n\n"):
            block = _COMMENTS_RE.sub("", chunk).strip()
            if not block:
                continue
            newline = block.find("\n")
            if newline == -1:
                # A header-only block is allowed for empty, non-base64 content.
                if " " in block and "/" in block and ";base64" not in block:
                    newline = len(block)
                else:
                    continue
            first_line, body = block[:newline], block[newline:]
            header = first_line.split()
            if len(header) < 2:
                continue
            name, content_type = header[0], header[1]
            resources[name] = Resource(content_type=content_type, data=body.strip())
        return cls(resources=resources)

    def get_resource(self, name: str) -> Optional[Resource]:
        """Return the resource called ``name``, or None."""
        return self.resources.get(name)

    def add_resource(self, name: str, resource: Resource) -> None:
        """Add or replace the resource called ``name``."""
        self.resources[name] = resource