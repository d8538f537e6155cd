"""Lenient enum parsing and rendering"""

import enum
from typing import Optional, Type, TypeVar

import structlog

logger = structlog.get_logger()

E = TypeVar("E", bound=enum.Enum)


def parse_or_ignore(enum_cls: Type[E], raw: Optional[str]) -> Optional[E]:
    """
    Match ``raw`` against the member names of ``enum_cls``, ignoring case.

    Returns None instead of raising when the value is missing, blank or
    names no member. Callers treat None as "leave it alone": no filter is
    applied and no field is overwritten.
    """
    if raw is None:
        return None
    if isinstance(raw, enum_cls):
        return raw

    key = str(raw).strip().upper()
    if not key:
        return None

    member = enum_cls.__members__.get(key)
    if member is None:
        logger.debug("Ignoring unknown enum value", enum=enum_cls.__name__, value=raw)
    return member


def enum_label(value) -> Optional[str]:
    """External rendering of a status: the lowercase member name"""
    if value is None:
        return None
    if isinstance(value, enum.Enum):
        return value.name.lower()
    return str(value).lower()
