"""List-query pipeline: lenient parsing, paging, sparse patching and projection"""

from sales_api.query.enums import parse_or_ignore, enum_label
from sales_api.query.listing import (
    PageRequest,
    Page,
    ListSpec,
    ContainsFilter,
    EqualsFilter,
    EnumFilter,
    fetch_page,
    parse_int,
    parse_datetime,
)
from sales_api.query.patching import (
    FieldUpdate,
    PatchRule,
    collect_updates,
    apply_patch,
)

__all__ = [
    "parse_or_ignore",
    "enum_label",
    "PageRequest",
    "Page",
    "ListSpec",
    "ContainsFilter",
    "EqualsFilter",
    "EnumFilter",
    "fetch_page",
    "parse_int",
    "parse_datetime",
    "FieldUpdate",
    "PatchRule",
    "collect_updates",
    "apply_patch",
]
