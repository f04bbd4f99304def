"""Shared column helpers for models."""

import uuid

from sqlalchemy import Column, DateTime, func
from sqlalchemy.orm import declared_attr


def generate_id() -> str:
    """Primary keys are opaque strings so "all" can never collide with one."""
    return str(uuid.uuid4())


class TimestampMixin:
    """Mixin that adds created_at and updated_at columns."""

    @declared_attr
    def created_at(cls):
        return Column(
            DateTime,
            default=func.now(),
            nullable=False,
        )

    @declared_attr
    def updated_at(cls):
        return Column(
            DateTime,
            onupdate=func.now(),
            nullable=True,
        )
