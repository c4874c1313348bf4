"""Word Query Rules — pure resolution of search, sort and paging inputs.

Invariants:
    - resolve_sort() only ever returns SortField/SortOrder members
    - Unknown sort field → CREATION_DATE; unknown direction → DESC
    - Unknown preset → NEWEST
    - like_pattern() escapes LIKE metacharacters so the term matches literally

Design Decisions:
    - Fallbacks are silent (no error): clients send free-form query strings and a bad
      sort must never fail a listing
"""

import math

from lexicology.core.domain_types import SortField, SortOrder, SortPreset

LIKE_ESCAPE = "\\"

SORT_PRESETS: dict[SortPreset, tuple[SortField, SortOrder]] = {
    SortPreset.NEWEST: (SortField.CREATION_DATE, SortOrder.DESC),
    SortPreset.OLDEST: (SortField.CREATION_DATE, SortOrder.ASC),
    SortPreset.A_TO_Z: (SortField.WORD, SortOrder.ASC),
    SortPreset.Z_TO_A: (SortField.WORD, SortOrder.DESC),
}


def resolve_sort(
    sort_by: str | None, sort_order: str | None,
) -> tuple[SortField, SortOrder]:
    """Map requested sort inputs onto the whitelist, falling back silently."""
    try:
        field = SortField(sort_by)
    except ValueError:
        field = SortField.CREATION_DATE
    try:
        order = SortOrder((sort_order or "").upper())
    except ValueError:
        order = SortOrder.DESC
    return field, order


def resolve_preset(preset: str | None) -> tuple[SortField, SortOrder]:
    """Translate a client-facing preset name into field and direction."""
    try:
        return SORT_PRESETS[SortPreset(preset)]
    except ValueError:
        return SORT_PRESETS[SortPreset.NEWEST]


def like_pattern(term: str) -> str:
    """Wrap a search term in wildcards, escaping %, _ and the escape char."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def page_offset(page: int, limit: int) -> int:
    """Offset of a 1-based page."""
    return (max(page, 1) - 1) * limit


def total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)
