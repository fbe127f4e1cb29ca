"""
Tests for the column types, collations and naming conventions of the core model.
"""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.dialects import mssql, postgresql, sqlite

from bounded_context.domain.entities import LineItem
from bounded_context.infrastructure.databases import collations
from bounded_context.infrastructure.databases.core_model import line_items_table
from bounded_context.infrastructure.databases.naming import pluralize, table_name_for
from bounded_context.infrastructure.databases.types import CollatedString, UtcDateTime, decimal_type


class TestCollations:

    @pytest.mark.parametrize("dialect, binary, cultural", [
        ("mssql", "Latin1_General_100_BIN2", "Latin1_General_100_CI_AS"),
        ("postgresql", "C", None),
        ("sqlite", "BINARY", "NOCASE"),
    ])
    def test_per_dialect(self, dialect, binary, cultural):
        assert collations.collation_for(dialect, collations.BINARY) == binary
        assert collations.collation_for(dialect, collations.CULTURAL) == cultural

    def test_default_is_binary(self):
        assert collations.collation_for("sqlite") == "BINARY"

    def test_unknown_dialect_uses_database_default(self):
        assert collations.collation_for("oracle", collations.BINARY) is None

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            collations.collation_for("sqlite", "accent-insensitive")

    def test_collated_string(self):
        column_type = CollatedString(200, collation_kind=collations.CULTURAL)
        impl = column_type.load_dialect_impl(mssql.dialect())
        assert impl.length == 200
        assert impl.collation == "Latin1_General_100_CI_AS"


class TestNaming:

    @pytest.mark.parametrize("name, plural", [
        ("line_item", "line_items"),
        ("currency", "currencies"),
        ("address", "addresses"),
    ])
    def test_pluralize(self, name, plural):
        assert pluralize(name) == plural

    def test_table_name_for(self):
        assert table_name_for(LineItem) == "line_items"
        assert line_items_table.name == "line_items"


class TestUtcDateTime:

    def test_stores_naive_utc_with_millisecond_precision(self):
        value = datetime(2024, 3, 1, 12, 0, 0, 123456, tzinfo=timezone(timedelta(hours=2)))
        stored = UtcDateTime().process_bind_param(value, sqlite.dialect())
        assert stored == datetime(2024, 3, 1, 10, 0, 0, 123000)
        assert stored.tzinfo is None

    def test_loads_as_utc(self):
        loaded = UtcDateTime().process_result_value(datetime(2024, 3, 1, 10, 0), sqlite.dialect())
        assert loaded.tzinfo is timezone.utc

    def test_naive_rejected(self):
        with pytest.raises(ValueError, match="naive"):
            UtcDateTime().process_bind_param(datetime(2024, 3, 1), sqlite.dialect())


class TestDecimalType:

    def test_default_precision_and_scale(self):
        column_type = decimal_type()
        assert (column_type.precision, column_type.scale) == (19, 9)
        assert column_type.asdecimal is True

    def test_decimal_columns(self):
        for name in ("quantity", "unit_price", "exchange_rate"):
            assert line_items_table.c[name].type.precision == 19

    def test_postgresql_renders_numeric(self):
        compiled = decimal_type().compile(dialect=postgresql.dialect())
        assert compiled == "NUMERIC(19, 9)"
