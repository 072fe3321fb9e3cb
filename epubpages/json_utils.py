"""JSON serialization helpers using optional orjson."""

from __future__ import annotations

try:
    import orjson  # type: ignore[import-not-found]
except ImportError:  # pragma: no cover - optional dependency
    orjson = None  # type: ignore[assignment]

import json


def json_dumps(data: object, indent: bool = False) -> str:
    """Serialize data to a JSON string, keeping non-ASCII text readable.

    Args:
        data: Data structure to serialize.
        indent: Pretty-print with two-space indentation.

    Returns:
        JSON representation of ``data``.
    """

    if orjson is not None:
        option = orjson.OPT_INDENT_2 if indent else 0
        return orjson.dumps(data, option=option).decode()
    return json.dumps(data, ensure_ascii=False, indent=2 if indent else None)


def json_loads(data: str | bytes) -> object:
    """Decode the contents of a JSON configuration file.

    Args:
        data: File contents as ``str`` or ``bytes``.

    Returns:
        Decoded value; callers check that it is a mapping.

    Throws:
        ValueError: If ``data`` is not valid JSON. Both the ``orjson`` and
            the ``json`` decode errors derive from it.
    """

    if orjson is not None:
        return orjson.loads(data)
    if isinstance(data, (bytes, bytearray)):
        return json.loads(data.decode())
    return json.loads(data)
