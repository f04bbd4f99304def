"""Pydantic schemas for clinic and assistant pickers."""

from .base import CamelModel


class ClinicListItem(CamelModel):
    id: str
    name: str


class AssistantListItem(CamelModel):
    id: str
    name: str
