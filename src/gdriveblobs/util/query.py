"""Drive v2 search query helpers."""

from __future__ import annotations

from typing import Optional


def escape_query_value(value: str) -> str:
    """Escape a value for use inside a single-quoted Drive query literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def build_title_query(
    title: str,
    *,
    parent_id: Optional[str] = None,
    include_trashed: bool = False,
) -> str:
    """
    Build the ``q`` parameter matching files whose title equals ``title``.

    Examples:
        >>> build_title_query("a.txt")
        "title = 'a.txt' and trashed = false"
    """
    clauses = [f"title = '{escape_query_value(title)}'"]
    if parent_id is not None:
        clauses.append(f"'{escape_query_value(parent_id)}' in parents")
    if not include_trashed:
        clauses.append("trashed = false")
    return " and ".join(clauses)
