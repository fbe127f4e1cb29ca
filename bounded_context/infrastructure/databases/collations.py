"""Collations for textual columns, resolved per database dialect."""
from typing import Optional

# A binary, case-sensitive collation matching Python's ordinal string comparison
BINARY = "binary"

# A culture-sensitive, case-insensitive collation. Use only for non-indexed
# (or at the very least non-FK) columns, such as titles and descriptions.
CULTURAL = "cultural"

# Used for textual columns that do not specify a collation
DEFAULT = BINARY

# UTF-8 collations are avoided on SQL Server: their lengths are in bytes, which is easy to mismatch with validations
_COLLATIONS_BY_DIALECT = {
    "mssql": {BINARY: "Latin1_General_100_BIN2", CULTURAL: "Latin1_General_100_CI_AS"},
    # A case-insensitive collation on PostgreSQL is a nondeterministic ICU collation that must be created first
    "postgresql": {BINARY: "C", CULTURAL: None},
    "sqlite": {BINARY: "BINARY", CULTURAL: "NOCASE"},
}


def ensure_kind(kind: str) -> str:
    """Return the given collation kind, or raise if it is unknown."""
    if kind not in (BINARY, CULTURAL):
        raise ValueError(f"Unknown collation kind: {kind}")
    return kind


def collation_for(dialect_name: str, kind: str = DEFAULT) -> Optional[str]:
    """
    Resolve a collation kind to the dialect's collation name.

    Args:
        dialect_name: SQLAlchemy dialect name, e.g. "mssql"
        kind: BINARY or CULTURAL

    Returns:
        Collation name, or None to use the database default
    """
    return _COLLATIONS_BY_DIALECT.get(dialect_name, {}).get(ensure_kind(kind))
