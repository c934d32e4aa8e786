"""
UUID7 helpers

- to_std_uuid / from_std_uuid: conversion at the SQLAlchemy boundary, the
  `Uuid` column type binds and returns stdlib uuid.UUID
- parse_uuid: path/body identifiers with a caller-chosen error message
"""

from typing import Any
import uuid

from uuid_utils import UUID

from src.platform.exception.exceptions import ValidationError


def to_std_uuid(value: UUID | uuid.UUID | str) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def from_std_uuid(value: uuid.UUID | str) -> UUID:
    return UUID(str(value))


def parse_uuid(value: Any, *, message: str) -> UUID:
    """
    Raises:
        ValidationError: value is not a UUID string (malformed ids are not "not found")
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except (TypeError, ValueError) as e:
        raise ValidationError(message) from e
