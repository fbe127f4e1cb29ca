"""The core database model: tables, imperative mappings of the domain types, and conventions."""
import logging
import threading
from typing import Dict, List

from sqlalchemy import Column, Integer, Table
from sqlalchemy.orm import registry

from bounded_context.domain.entities.external_id import ExternalId
from bounded_context.domain.entities.line_item import LineItem
from bounded_context.domain.shared import reconstitution
from bounded_context.infrastructure.databases import collations
from bounded_context.infrastructure.databases.conventions import PrecisionGuard, apply_precision_conventions
from bounded_context.infrastructure.databases.naming import table_name_for
from bounded_context.infrastructure.databases.types import CollatedString, UtcDateTime, decimal_type
from bounded_context.infrastructure.databases.wrapper_converter import WrapperConverter

logger = logging.getLogger(__name__)

mapper_registry = registry()
metadata = mapper_registry.metadata

line_items_table = Table(
    table_name_for(LineItem),
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("external_id", WrapperConverter(ExternalId, length=ExternalId.MAX_LENGTH), nullable=False, unique=True),
    Column(
        "description",
        CollatedString(LineItem.MAX_DESCRIPTION_LENGTH, collation_kind=collations.CULTURAL),
        nullable=False,
    ),
    Column("quantity", decimal_type(), nullable=False),
    Column("unit_price", decimal_type(), nullable=False),
    Column("exchange_rate", decimal_type(), nullable=False),
    Column("created_at", UtcDateTime(), nullable=False),
)

_lock = threading.Lock()
_configured = False
_precision_guards: Dict[type, List[PrecisionGuard]] = {}


def configure_core_model() -> registry:
    """
    Map the domain types onto their tables and finalize the model.

    Runs once per process; later calls return the already configured registry.
    Configuration errors surface here, before the service handles any work.
    """
    global _configured
    with _lock:
        if _configured:
            return mapper_registry

        for entity_type, table in ((LineItem, line_items_table),):
            mapper = mapper_registry.map_imperatively(entity_type, table)
            # Stored rows are restored through the ORM's own instance state, never through the constructor
            reconstitution.register_allocator(entity_type, mapper.class_manager.new_instance)
            _precision_guards[entity_type] = apply_precision_conventions(mapper)

        mapper_registry.configure()
        _configured = True
        logger.info(f"Core database model configured: {sorted(metadata.tables)}")

    return mapper_registry


def precision_guards(entity_type: type) -> List[PrecisionGuard]:
    """The precision guards attached to a mapped domain type."""
    configure_core_model()
    return list(_precision_guards.get(entity_type, []))
