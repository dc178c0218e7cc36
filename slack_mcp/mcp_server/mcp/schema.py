from __future__ import annotations

from typing import Any


class SchemaValidationError(ValueError):
    pass


_TYPE_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "integer": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "object": lambda v: isinstance(v, dict),
    "array": lambda v: isinstance(v, list),
}


def validate_tool_args(schema: dict[str, Any], args: Any) -> dict[str, Any]:
    """Validate tool args against a minimal JSON Schema subset.

    Supported:
    - type=object
    - properties + required
    - additionalProperties (default: True)
    - primitive types: string/integer/number/boolean/object/array
    - enum on properties
    - default on properties (filled in when the key is absent)

    Returns a new dict with defaults applied; the input is not modified.
    """
    if not isinstance(schema, dict):
        raise SchemaValidationError("inputSchema must be an object")

    st = schema.get("type", "object")
    if st != "object":
        raise SchemaValidationError("only type=object schema is supported")

    if args is None:
        args = {}
    if not isinstance(args, dict):
        raise SchemaValidationError("args must be an object")

    props = schema.get("properties") or {}
    if not isinstance(props, dict):
        raise SchemaValidationError("properties must be an object")

    required = schema.get("required") or []
    if not isinstance(required, list):
        raise SchemaValidationError("required must be an array")

    missing = [k for k in required if isinstance(k, str) and k not in args]
    if missing:
        raise SchemaValidationError(f"missing required field(s): {', '.join(missing)}")

    if schema.get("additionalProperties", True) is False:
        for k in args:
            if k not in props:
                raise SchemaValidationError(f"unexpected field: {k}")

    out = dict(args)
    for key, prop_schema in props.items():
        if key in out:
            _validate_value(key, out[key], prop_schema)
        elif isinstance(prop_schema, dict) and "default" in prop_schema:
            out[key] = prop_schema["default"]
    return out


def _validate_value(key: str, value: Any, prop_schema: Any) -> None:
    if not isinstance(prop_schema, dict):
        return

    t = prop_schema.get("type")
    check = _TYPE_CHECKS.get(t) if isinstance(t, str) else None
    # Unknown type: do not reject (forward-compatible).
    if check is not None and not check(value):
        raise SchemaValidationError(f"field {key} must be {t}")

    allowed = prop_schema.get("enum")
    if isinstance(allowed, list) and value not in allowed:
        raise SchemaValidationError(f"field {key} must be one of {allowed}")
