"""
Tests for loading stored state without running validating constructors.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
import threading

import pytest
from sqlalchemy import insert

from bounded_context.domain.domain_object import WrapperValueObject
from bounded_context.domain.entities import ExternalId, LineItem
from bounded_context.domain.error_codes import ErrorCode
from bounded_context.domain.exceptions import ValidationError
from bounded_context.domain.shared import reconstitution
from bounded_context.infrastructure.databases.core_model import line_items_table


@dataclass(frozen=True)
class Code(WrapperValueObject):
    _code: str

    def __post_init__(self):
        raise AssertionError("The constructor must not run")


class Slotted:
    __slots__ = ("_value",)

    def __init__(self, value):
        raise AssertionError("The constructor must not run")


class TestReconstitute:
    """The loader path of domain objects."""

    def test_frozen_dataclass(self):
        code = Code.reconstitute(_code="X")
        assert code._code == "X"

    def test_slots_class(self):
        instance = reconstitution.reconstitute(Slotted, {"_value": 5})
        assert instance._value == 5

    def test_skips_validation(self):
        external_id = ExternalId.reconstitute(_value="not valid today!")
        assert external_id.value == "not valid today!"

        with pytest.raises(ValidationError) as exc_info:
            ExternalId("not valid today!")
        assert exc_info.value.error_code is ErrorCode.EXTERNAL_ID_VALUE_INVALID

    def test_unknown_field_rejected(self):
        with pytest.raises(AttributeError):
            Code.reconstitute(_missing="X")

    def test_field_setter_is_cached(self):
        assert reconstitution.field_setter(Code, "_code") is reconstitution.field_setter(Code, "_code")

    def test_field_setter_created_once_under_concurrent_first_access(self):
        @dataclass(frozen=True)
        class Token(WrapperValueObject):
            _token: str

        barrier = threading.Barrier(8)
        setters = []

        def first_access():
            barrier.wait()
            setters.append(reconstitution.field_setter(Token, "_token"))

        threads = [threading.Thread(target=first_access) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(setters) == 8
        assert all(setter is setters[0] for setter in setters)

    def test_mapped_entity(self, repository):
        line_item = LineItem.reconstitute(
            external_id=ExternalId("restored"),
            description="",
            quantity=Decimal("-5"),
            unit_price=Decimal("1.00"),
            exchange_rate=Decimal("1"),
            created_at=datetime(2020, 1, 1, tzinfo=timezone.utc),
        )
        assert line_item.description == ""
        assert line_item.quantity == Decimal("-5")

        # The instance carries ORM state, so it can be stored like any other
        repository.add(line_item)
        assert line_item.id is not None


class TestLoadingStoredRows:
    """Rows that fail today's validation still load, exposing the stored values unchanged."""

    @pytest.fixture
    def legacy_row(self, session):
        session.execute(insert(line_items_table).values(
            external_id=ExternalId.reconstitute(_value="legacy id with spaces"),
            description="   ",
            quantity=Decimal("0"),
            unit_price=Decimal("-3.50"),
            exchange_rate=Decimal("1"),
            created_at=datetime(2019, 6, 1, 12, 0, tzinfo=timezone.utc),
        ))

    def test_load_invalid_row(self, legacy_row, session, repository):
        line_items = repository.list_all()

        assert len(line_items) == 1
        line_item = line_items[0]
        assert line_item.external_id.value == "legacy id with spaces"
        assert line_item.description == "   "
        assert line_item.quantity == Decimal("0")
        assert line_item.unit_price == Decimal("-3.50")

    def test_lookup_by_external_id(self, legacy_row, repository):
        line_item = repository.get_by_external_id(ExternalId.reconstitute(_value="legacy id with spaces"))
        assert line_item is not None
        assert isinstance(line_item.external_id, ExternalId)

    def test_constructor_would_reject_the_row(self):
        with pytest.raises(ValidationError):
            LineItem(
                external_id=ExternalId("legacy"),
                description="   ",
                quantity=Decimal("0"),
                unit_price=Decimal("-3.50"),
            )
