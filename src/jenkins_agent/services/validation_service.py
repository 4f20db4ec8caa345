from typing import Any

from jenkins_shared.errors import InvalidArgument

# JSON types that appear in the gateway tool schemas
_TYPE_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "integer": lambda v: isinstance(v, int) and not isinstance(v, bool),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "object": lambda v: isinstance(v, dict),
    "null": lambda v: v is None,
}


def validate_arguments(args: dict[str, Any], schema: dict[str, Any]) -> None:
    """
    Check tool arguments against a tool's input schema before dispatch.

    Only required fields and property types are checked; a required field holding
    null counts as missing. Properties the schema does not describe pass through.

    Raises:
        InvalidArgument: On a missing required field or a type mismatch.
    """
    properties = schema.get("properties") or {}

    for name in schema.get("required", []):
        if args.get(name) is None:
            raise InvalidArgument(f"Missing required argument: {name}")

    for name, value in args.items():
        expected = properties.get(name, {}).get("type")
        if expected is None:
            continue
        allowed = [expected] if isinstance(expected, str) else list(expected)
        if not any(_TYPE_CHECKS.get(t, lambda v: False)(value) for t in allowed):
            raise InvalidArgument(
                f"Argument '{name}' has wrong type; expected {' or '.join(allowed)}"
            )
