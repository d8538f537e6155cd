"""
Sparse-patch application.

A patch payload is read into a mapping of field name to ``FieldUpdate``,
which keeps apart the three cases a JSON body can express for a field:
not sent, sent as null, sent with a value. Each patchable column then has a
``PatchRule`` that decides what each case does to the entity.
"""

import enum
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel

from sales_api.query.enums import parse_or_ignore


class UpdateState(enum.Enum):
    ABSENT = "absent"
    NULL = "null"
    VALUE = "value"


@dataclass(frozen=True)
class FieldUpdate:
    state: UpdateState
    value: Any = None

    @classmethod
    def of(cls, value: Any) -> "FieldUpdate":
        if value is None:
            return NULL
        return cls(UpdateState.VALUE, value)


ABSENT = FieldUpdate(UpdateState.ABSENT)
NULL = FieldUpdate(UpdateState.NULL)


class RuleKind(enum.Enum):
    REQUIRED = "required"            # value overwrites, null ignored
    TEXT = "text"                    # non-blank text overwrites, null/blank ignored
    OPTIONAL_TEXT = "optional_text"  # non-blank text overwrites, null clears, blank ignored
    NULLABLE = "nullable"            # value overwrites, null clears
    ENUM = "enum"                    # known member name overwrites, anything else ignored


@dataclass(frozen=True)
class PatchRule:
    kind: RuleKind
    enum_cls: Optional[Type[enum.Enum]] = None


REQUIRED = PatchRule(RuleKind.REQUIRED)
TEXT = PatchRule(RuleKind.TEXT)
OPTIONAL_TEXT = PatchRule(RuleKind.OPTIONAL_TEXT)
NULLABLE = PatchRule(RuleKind.NULLABLE)


def enum_rule(enum_cls: Type[enum.Enum]) -> PatchRule:
    return PatchRule(RuleKind.ENUM, enum_cls)


def collect_updates(payload: BaseModel) -> Dict[str, FieldUpdate]:
    """Fields the client actually sent; anything missing here is ABSENT"""
    return {
        name: FieldUpdate.of(getattr(payload, name))
        for name in payload.model_fields_set
    }


def _blank(value: Any) -> bool:
    return isinstance(value, str) and not value.strip()


def resolve(rule: PatchRule, update: FieldUpdate) -> Tuple[bool, Any]:
    """Return (write, value) for one field"""
    if update.state is UpdateState.ABSENT:
        return False, None

    if update.state is UpdateState.NULL:
        return rule.kind in (RuleKind.NULLABLE, RuleKind.OPTIONAL_TEXT), None

    value = update.value
    if rule.kind in (RuleKind.TEXT, RuleKind.OPTIONAL_TEXT) and _blank(value):
        return False, None
    if rule.kind is RuleKind.ENUM:
        member = parse_or_ignore(rule.enum_cls, value)
        return member is not None, member
    return True, value


def apply_patch(entity: Any, updates: Mapping[str, FieldUpdate], rules: Mapping[str, PatchRule]) -> List[str]:
    """
    Merge ``updates`` onto ``entity`` in place.

    Only fields listed in ``rules`` are considered. Returns the names of the
    fields whose value actually changed, in rule order.
    """
    changed = []
    for name, rule in rules.items():
        write, value = resolve(rule, updates.get(name, ABSENT))
        if not write:
            continue
        if getattr(entity, name) != value:
            setattr(entity, name, value)
            changed.append(name)
    return changed
