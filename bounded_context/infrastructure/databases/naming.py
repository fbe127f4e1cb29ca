"""Table naming."""
import re

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def pluralize(name: str) -> str:
    """Pluralize a (snake_case or CamelCase) name: "y" becomes "ies", "s" becomes "ses", otherwise "s" is appended."""
    if name.endswith("y"):
        return f"{name[:-1]}ies"
    if name.endswith("s"):
        return f"{name}es"
    return f"{name}s"


def table_name_for(entity_type: type) -> str:
    """Plural snake_case table name for an entity type, e.g. LineItem -> line_items."""
    snake = _CAMEL_BOUNDARY.sub("_", entity_type.__name__).lower()
    return pluralize(snake)
