"""
Tests for the precision conventions applied to the storage model.

Guards are built once per mapped type and run on every insert and update.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import pytest
from sqlalchemy import Column, Integer, MetaData, Numeric, String, Table, insert, select
from sqlalchemy.orm import registry

from bounded_context.domain.entities import ExternalId, LineItem
from bounded_context.domain.exceptions import DeveloperError, PrecisionViolationError
from bounded_context.domain.shared import LimitedPrecisionDecimal, MonetaryAmount
from bounded_context.domain.shared.precision_markers import (
    PrecisionMarker,
    declared_markers,
    monetary_amount,
    unlimited_precision,
)
from bounded_context.infrastructure.databases.conventions import (
    LimitedPrecisionDecimalConvention,
    MonetaryAmountConvention,
    PersistablePropertyDescriptor,
    build_precision_guards,
    describe_properties,
)
from bounded_context.infrastructure.databases.core_model import line_items_table, precision_guards
from bounded_context.infrastructure.databases.types import decimal_type


def make_line_item(**overrides) -> LineItem:
    values = dict(
        external_id=ExternalId("line-1"),
        description="Widget",
        quantity=Decimal("2"),
        unit_price=Decimal("10.50"),
        exchange_rate=Decimal("1.0837"),
    )
    values.update(overrides)
    return LineItem(**values)


@dataclass
class Ledger:
    """A type mapped only within these tests."""

    balance: Decimal
    fee: Decimal = field(metadata=monetary_amount())
    rate: Decimal = field(default=Decimal(1), metadata=unlimited_precision())
    note: str = ""
    legacy_amount: Optional[Decimal] = None
    id: Optional[int] = field(default=None, init=False)


@pytest.fixture(scope="module")
def ledger_mapper():
    ledger_registry = registry(metadata=MetaData())
    table = Table(
        "ledgers",
        ledger_registry.metadata,
        Column("id", Integer, primary_key=True),
        Column("balance", decimal_type()),
        Column("fee", decimal_type()),
        Column("rate", decimal_type()),
        Column("note", String(20)),
        # A non-default precision is left to the developer
        Column("legacy_amount", Numeric(10, 2)),
    )
    return ledger_registry.map_imperatively(Ledger, table)


class TestPrecisionMarkers:
    """Markers declared through dataclass field metadata."""

    def test_declared_markers(self):
        assert declared_markers(Ledger) == {
            "fee": PrecisionMarker.MONETARY_AMOUNT,
            "rate": PrecisionMarker.UNLIMITED_PRECISION,
        }

    def test_markers_keep_other_metadata(self):
        metadata = monetary_amount(doc="Fee")
        assert metadata["doc"] == "Fee"

    def test_non_dataclass_has_no_markers(self):
        assert declared_markers(object) == {}


class TestBuildPrecisionGuards:
    """Pairing of mapped properties with normalizers."""

    def test_guards_by_property(self, ledger_mapper):
        guards = build_precision_guards(describe_properties(ledger_mapper))
        by_name = {guard.descriptor.name: guard.normalizer for guard in guards}

        assert by_name == {
            "balance": LimitedPrecisionDecimal,
            "fee": MonetaryAmount,
        }

    def test_unmarked_default_precision_decimal_is_limited(self):
        descriptor = PersistablePropertyDescriptor(Ledger, "balance", Decimal, 19, 9)
        assert LimitedPrecisionDecimalConvention().applies_to(descriptor)
        assert not MonetaryAmountConvention().applies_to(descriptor)

    def test_unlimited_precision_opts_out(self):
        descriptor = PersistablePropertyDescriptor(
            Ledger, "rate", Decimal, 19, 9, PrecisionMarker.UNLIMITED_PRECISION
        )
        assert build_precision_guards([descriptor]) == []

    def test_monetary_marker_on_non_decimal_is_developer_error(self):
        descriptor = PersistablePropertyDescriptor(
            Ledger, "note", str, None, None, PrecisionMarker.MONETARY_AMOUNT
        )
        with pytest.raises(DeveloperError, match="Ledger.note"):
            build_precision_guards([descriptor])

    def test_later_convention_wins(self):
        class EverythingIsMoney(MonetaryAmountConvention):
            def applies_to(self, descriptor):
                return descriptor.python_type is Decimal

        descriptor = PersistablePropertyDescriptor(Ledger, "balance", Decimal, 19, 9)
        guards = build_precision_guards(
            [descriptor], [LimitedPrecisionDecimalConvention(), EverythingIsMoney()]
        )
        assert [guard.normalizer for guard in guards] == [MonetaryAmount]

    def test_line_item_guards(self):
        by_name = {guard.descriptor.name: guard.normalizer for guard in precision_guards(LineItem)}
        assert by_name == {
            "quantity": LimitedPrecisionDecimal,
            "unit_price": MonetaryAmount,
        }


class TestPrecisionEnforcementOnWrite:
    """Writes of over-precise values abort the flush."""

    def test_storable_values_are_written(self, repository):
        repository.add(make_line_item(quantity=Decimal("2.1234"), unit_price=Decimal("10.50")))
        assert repository.count() == 1

    def test_over_precise_quantity_rejected(self, repository):
        with pytest.raises(PrecisionViolationError) as exc_info:
            repository.add(make_line_item(quantity=Decimal("1.23456")))
        assert exc_info.value.type_name == "LimitedPrecisionDecimal"

    def test_subcent_unit_price_rejected(self, repository):
        with pytest.raises(PrecisionViolationError) as exc_info:
            repository.add(make_line_item(unit_price=Decimal("19.999")))
        assert exc_info.value.type_name == "MonetaryAmount"

    def test_unlimited_precision_exchange_rate_accepted(self, repository):
        repository.add(make_line_item(exchange_rate=Decimal("1.083712345")))
        assert repository.count() == 1

    def test_over_precise_update_rejected(self, repository, session):
        line_item = repository.add(make_line_item())
        line_item.quantity = Decimal("3.00001")
        with pytest.raises(PrecisionViolationError):
            session.flush()

    @pytest.fixture
    def over_precise_row(self, session):
        """A row stored before the guards existed, bypassing them."""
        session.execute(insert(line_items_table).values(
            external_id=ExternalId("legacy"),
            description="Widget",
            quantity=Decimal("1.23456"),
            unit_price=Decimal("10.50"),
            exchange_rate=Decimal("1"),
            created_at=datetime(2019, 6, 1, tzinfo=timezone.utc),
        ))

    def test_update_of_other_field_leaves_stored_value_unchecked(self, over_precise_row, repository, session):
        line_item = repository.get_by_external_id(ExternalId("legacy"))
        assert LimitedPrecisionDecimal.is_too_precise(line_item.quantity)

        line_item.description = "Renamed"
        session.flush()
        session.expunge_all()

        assert repository.get_by_external_id(ExternalId("legacy")).description == "Renamed"

    def test_changed_over_precise_value_rejected(self, over_precise_row, repository, session):
        line_item = repository.get_by_external_id(ExternalId("legacy"))
        line_item.quantity = Decimal("1.23457")
        with pytest.raises(PrecisionViolationError):
            session.flush()

    def test_failed_flush_writes_nothing(self, database):
        with pytest.raises(PrecisionViolationError):
            with database.session_scope() as session:
                session.add(make_line_item(external_id=ExternalId("stored-first")))
                session.add(make_line_item(external_id=ExternalId("too-precise"), quantity=Decimal("0.00001")))

        with database.session_scope() as session:
            assert session.execute(select(line_items_table.c.id)).first() is None

    def test_created_at_is_utc_after_round_trip(self, repository, session):
        created_at = datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=timezone.utc)
        repository.add(make_line_item(created_at=created_at))
        session.expunge_all()

        loaded = repository.get_by_external_id(ExternalId("line-1"))
        assert loaded.created_at == datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
