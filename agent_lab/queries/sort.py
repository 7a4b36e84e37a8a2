"""Sort directives and the compact sort-string parser."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SortField:
    """One ORDER BY entry keyed by logical field name."""

    field: str
    descending: bool = False


def parse_sort_fields(spec: str | None) -> list[SortField]:
    """Parse a sort string such as ``"name,-created_at"``.

    Segments are comma separated and trimmed; a leading ``-`` marks the
    field as descending. An empty string yields an empty list, which lets a
    builder fall back to its default sort.
    """
    if not spec:
        return []

    fields: list[SortField] = []
    for segment in spec.split(","):
        segment = segment.strip()
        descending = segment.startswith("-")
        if descending:
            segment = segment[1:].strip()
        if not segment:
            continue
        fields.append(SortField(segment, descending))
    return fields
