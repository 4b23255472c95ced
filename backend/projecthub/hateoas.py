"""
ProjectHub Backend — HATEOAS Link Builder
===========================================

What:  Computes the `self`, `first`, `last`, `next` and `prev` links of a
       paginated list response.
How:   Pure function over (total, limit, offset, base URL, query params).
       Every other query parameter of the request is carried over verbatim,
       only `limit` and `offset` are rewritten.

Link rules:
    self   offset as requested
    first  offset = 0
    last   offset = floor((total - 1) / limit) * limit, 0 when total = 0
    next   only when offset + limit < total
    prev   only when offset > 0; offset = max(offset - limit, 0)

Example (total=5, limit=2, offset=2):
    self  /users?limit=2&offset=2
    first /users?limit=2&offset=0
    last  /users?limit=2&offset=4
    next  /users?limit=2&offset=4
    prev  /users?limit=2&offset=0
"""

from typing import Dict, Iterable, List, Mapping, Tuple, Union
from urllib.parse import urlencode

QueryParams = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


def _query_items(query_params: QueryParams) -> List[Tuple[str, str]]:
    # Starlette's QueryParams is a Mapping but multi_items() keeps repeated keys
    if hasattr(query_params, "multi_items"):
        return list(query_params.multi_items())
    if isinstance(query_params, Mapping):
        return list(query_params.items())
    return list(query_params)


def last_page_offset(total: int, limit: int) -> int:
    return max((total - 1) // limit * limit, 0)


def _with_window(items: List[Tuple[str, str]], limit: int, offset: int) -> List[Tuple[str, str]]:
    """Replace limit/offset in place (first occurrence) or append them."""
    overrides = {"limit": str(limit), "offset": str(offset)}
    seen = set()
    result = []
    for key, value in items:
        if key in overrides:
            if key in seen:
                continue
            seen.add(key)
            value = overrides[key]
        result.append((key, value))
    for key in ("limit", "offset"):
        if key not in seen:
            result.append((key, overrides[key]))
    return result


def build_links(
    total: int,
    limit: int,
    offset: int,
    base_url: str,
    query_params: QueryParams = (),
) -> Dict[str, str]:
    """
    Build pagination links for one page of a list endpoint.

    Args:
        total:        Row count matching the request's filters (>= 0)
        limit:        Effective page size (> 0)
        offset:       Effective offset (>= 0)
        base_url:     Scheme, host and path of the list endpoint, no query
        query_params: The request's original query parameters

    Returns:
        Mapping of link name to absolute URL; `next` / `prev` only when they exist.
    """
    items = _query_items(query_params)

    def url_for(new_offset: int) -> str:
        return f"{base_url}?{urlencode(_with_window(items, limit, new_offset))}"

    links = {
        "self": url_for(offset),
        "first": url_for(0),
        "last": url_for(last_page_offset(total, limit)),
    }

    if offset + limit < total:
        links["next"] = url_for(offset + limit)

    if offset > 0:
        links["prev"] = url_for(max(offset - limit, 0))

    return links
