"""Google Query Language (GQL) construction for the gviz ``tq`` parameter.

Options are interpolated verbatim; nothing here validates GQL syntax. A
malformed ``where`` clause only fails once Google rejects it.
"""

from __future__ import annotations

import urllib.parse
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

# Characters left unescaped by JavaScript's encodeURIComponent
_QUERY_SAFE = "-_.!~*'()"

# Clause order is fixed regardless of how options were supplied.
# FORMAT and OPTIONS are never emitted.
QUERY_CLAUSES: tuple[tuple[str, str], ...] = (
    ("where", "WHERE"),
    ("group_by", "Group BY"),
    ("pivot", "PIVOT"),
    ("order_by", "ORDER BY"),
    ("limit", "LIMIT"),
    ("offset", "OFFSET"),
    ("label", "LABEL"),
)

# gviz vocabulary (camelCase) -> dataclass field
_KEY_ALIASES = {
    "groupBy": "group_by",
    "orderBy": "order_by",
}

# FetchOptions fields that are not options themselves
_BOOKKEEPING_FIELDS = frozenset({"extra", "supplied"})


@dataclass(frozen=True)
class QueryOptions:
    """Clauses of a GQL query. ``None`` omits the clause."""

    select: str | None = None
    where: str | None = None
    group_by: str | None = None
    pivot: str | None = None
    order_by: str | None = None
    limit: int | str | None = None
    offset: int | str | None = None
    label: str | None = None


@dataclass(frozen=True)
class FetchOptions(QueryOptions):
    """Query clauses plus the URL parameters of a CSV export request.

    ``extra`` holds keys that were supplied but are not recognised. They
    never produce a clause or parameter. ``supplied`` names every key given
    to ``from_mapping``, even one set to ``None``. Either makes the options
    non-empty, so a ``tq`` parameter is sent.
    """

    headers: int | str | None = None
    gid: int | str | None = None
    sheet: str | None = None
    range: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    supplied: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> FetchOptions:
        """Build options from a dict using camelCase or snake_case keys."""
        known = {f.name for f in fields(cls)} - _BOOKKEEPING_FIELDS
        values: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in options.items():
            name = _KEY_ALIASES.get(key, key)
            if name in known:
                values[name] = value
            else:
                extra[key] = value
        return cls(**values, extra=extra, supplied=frozenset(options))

    def is_empty(self) -> bool:
        """True when no option at all was supplied."""
        if self.extra or self.supplied:
            return False
        return all(
            getattr(self, f.name) is None
            for f in fields(self)
            if f.name not in _BOOKKEEPING_FIELDS
        )


def coerce_options(
    options: QueryOptions | Mapping[str, Any] | None,
) -> FetchOptions:
    """Normalise any accepted options value into ``FetchOptions``."""
    if options is None:
        return FetchOptions()
    if isinstance(options, FetchOptions):
        return options
    if isinstance(options, QueryOptions):
        return FetchOptions(
            **{f.name: getattr(options, f.name) for f in fields(QueryOptions)}
        )
    return FetchOptions.from_mapping(options)


def build_query(options: QueryOptions | Mapping[str, Any] | None) -> str:
    """Build a percent-encoded GQL query string.

    Args:
        options: Query clauses, as a dataclass or a plain mapping

    Returns:
        The encoded query, ready to append as the ``tq`` URL parameter

    Example:
        >>> urllib.parse.unquote(build_query({"limit": 5, "select": "a,b"}))
        'SELECT a,b LIMIT 5'
    """
    opts = coerce_options(options)

    query = f"SELECT {opts.select}" if opts.select else "SELECT *"
    for name, keyword in QUERY_CLAUSES:
        value = getattr(opts, name)
        if value:
            query += f" {keyword} {value}"

    return urllib.parse.quote(query, safe=_QUERY_SAFE)
