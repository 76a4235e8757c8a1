import io
import json
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel


def stringify(value: Any) -> str:
    """Render a value as a compact, human-readable struct dump.

    Models render as ``Name{field:value, ...}`` skipping unset (None) fields,
    strings are quoted, mappings render as ``{key:value}``. The output is
    stable for equal inputs, so it doubles as the wire form of opaque
    structured fields.
    """
    buf = io.StringIO()
    _write(buf, value)
    return buf.getvalue()


def _write(buf: io.StringIO, value: Any) -> None:
    if value is None:
        buf.write("<nil>")
    elif isinstance(value, Enum):
        _write(buf, value.value)
    elif isinstance(value, bool):
        buf.write("true" if value else "false")
    elif isinstance(value, str):
        buf.write(json.dumps(value, ensure_ascii=False))
    elif isinstance(value, (int, float)):
        buf.write(str(value))
    elif isinstance(value, (datetime, date)):
        buf.write(value.isoformat())
    elif isinstance(value, BaseModel):
        buf.write(type(value).__name__)
        fields = [(name, getattr(value, name)) for name in type(value).model_fields]
        fields.extend((value.model_extra or {}).items())
        _write_fields(buf, fields)
    elif isinstance(value, Mapping):
        _write_fields(buf, value.items())
    elif isinstance(value, (set, frozenset)):
        # unordered, so items are written sorted by their rendering
        buf.write("[" + ", ".join(sorted(stringify(item) for item in value)) + "]")
    elif isinstance(value, (list, tuple)):
        buf.write("[")
        for i, item in enumerate(value):
            if i > 0:
                buf.write(", ")
            _write(buf, item)
        buf.write("]")
    else:
        buf.write(str(value))


def _write_fields(buf: io.StringIO, items) -> None:
    buf.write("{")
    first = True
    for key, item in items:
        # absent optional fields are left out
        if item is None:
            continue
        if not first:
            buf.write(", ")
        buf.write(f"{key}:")
        _write(buf, item)
        first = False
    buf.write("}")
