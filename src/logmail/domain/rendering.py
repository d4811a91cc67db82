"""Mail body composition from a log message and optional metadata."""

from __future__ import annotations

import pprint

METADATA_DEPTH = 5


def render_metadata(metadata: object, depth: int = METADATA_DEPTH) -> str:
    """Render *metadata* as readable text, descending *depth* levels below the top object.

    Containers nested deeper than that are shown as ``...``. Mapping keys
    keep their insertion order.

    Example:
        >>> render_metadata({"code": 1})
        "{'code': 1}"
        >>> render_metadata({"a": {"b": {"c": 1}}}, depth=1)
        "{'a': {'b': {...}}}"
    """
    # pprint counts the top-level container as depth 1
    return pprint.pformat(metadata, depth=depth + 1, sort_dicts=False)


def compose_body(message: str, metadata: object | None = None) -> str:
    """Return the plain-text mail body for a log call.

    Example:
        >>> compose_body("boom")
        'boom'
        >>> compose_body("boom", {"code": 1})
        "boom\\n\\n{'code': 1}"
    """
    if metadata is None:
        return message
    return f"{message}\n\n{render_metadata(metadata)}"


__all__ = ["METADATA_DEPTH", "compose_body", "render_metadata"]
