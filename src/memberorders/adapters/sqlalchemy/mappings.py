"""SQLAlchemy mapping metadata for member-order submissions."""

from __future__ import annotations

from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    String,
    Table,
    TypeDecorator,
    orm,
)

from memberorders.domain.model import MemberOrderSubmission, SubmissionStatus

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _enum_values(enum_cls: type[SubmissionStatus]) -> list[str]:
    return [member.value for member in enum_cls]


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s",
}

member_order_table = Table(
    "member_order",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("plan_id", String, nullable=False),
    Column("participant_id", String, nullable=False),
    Column("order_id", String, nullable=False),
    Column("plan_data", JSON, nullable=False, default=dict),
    Column(
        "status",
        Enum(
            SubmissionStatus,
            native_enum=False,
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=False,
        default=SubmissionStatus.PENDING,
    ),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=True),
    Index("ix_member_order_status_created_at", "status", "created_at"),
)


@cache
def start_mappers() -> None:
    """Map domain classes onto their tables (idempotent)."""

    mapper_registry.map_imperatively(MemberOrderSubmission, member_order_table)


def create_all_tables(engine: Engine) -> None:
    mapper_registry.metadata.create_all(engine)
