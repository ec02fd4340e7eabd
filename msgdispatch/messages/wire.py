"""Field-name casing for the wire format."""

from pydantic.alias_generators import to_snake


def to_wire_key(name: str) -> str:
    """Map a field name (snake_case or camelCase) to the API's snake_case key."""
    return to_snake(name)
