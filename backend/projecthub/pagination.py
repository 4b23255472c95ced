"""
ProjectHub Backend — Pagination Resolver
==========================================

What:  Turns untrusted `limit` / `offset` query strings into a usable pair.
How:   Take the leading integer of each string (trailing text such as
       ".5" or "abc" is ignored), fall back to defaults on anything unusable.
Who:   Every list endpoint, through the `get_pagination` dependency.

Rules:
    limit:  absent, non-numeric or <= 0  → 25
    offset: absent, non-numeric or < 0   → 0

    There is no practical upper bound on `limit`; callers may request
    arbitrarily large pages. Both values are capped at the largest 64-bit
    integer the store accepts.
"""

import re
from dataclasses import dataclass
from typing import Optional

DEFAULT_LIMIT = 25
DEFAULT_OFFSET = 0

_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)

# LIMIT and OFFSET are 64-bit in both SQLite and PostgreSQL
MAX_WINDOW = 2**63 - 1


@dataclass(frozen=True)
class Pagination:
    limit: int
    offset: int


def _parse_int(raw: Optional[str]) -> Optional[int]:
    """Leading-integer parse: "2.5" → 2, "10abc" → 10, "1e3" → 1, "abc" → None."""
    if raw is None:
        return None
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return None
    return int(match.group(1))


def resolve_pagination(
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    default_limit: int = DEFAULT_LIMIT,
) -> Pagination:
    """Never fails: every input maps to a valid (limit > 0, offset >= 0) pair."""
    parsed_limit = _parse_int(limit)
    parsed_offset = _parse_int(offset)

    if parsed_limit is None or parsed_limit <= 0:
        parsed_limit = default_limit
    if parsed_offset is None or parsed_offset < 0:
        parsed_offset = DEFAULT_OFFSET

    return Pagination(limit=min(parsed_limit, MAX_WINDOW), offset=min(parsed_offset, MAX_WINDOW))
