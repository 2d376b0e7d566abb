"""Decoding of HTML form posts with bracketed field names."""

import re
from collections.abc import Iterable
from typing import Any

_KEY_PART = re.compile(r"\[([^\]]*)\]")


def parse_nested_form(items: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """Expand bracketed keys into nested dictionaries.

    ``contact[phones_attributes][0][number]=555`` becomes
    ``{"contact": {"phones_attributes": {"0": {"number": "555"}}}}``.
    When a key repeats, the last value wins; this is how a hidden ``0``
    followed by a checked ``1`` checkbox reads as checked. File uploads
    are ignored.
    """
    data: dict[str, Any] = {}
    for key, value in items:
        if not isinstance(value, str):
            continue

        head, bracket, rest = key.partition("[")
        parts = [head, *_KEY_PART.findall(bracket + rest)] if bracket else [head]

        node = data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    return data
