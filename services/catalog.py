"""
Scheme catalog search -- free-text query plus category / tag / mandatory facets.
"""

from __future__ import annotations

from typing import Iterable, Optional

from backend.schemas import SchemeFacets, SchemeOut

MANDATORY_FILTERS = ("all", "true", "false")


def _matches_query(scheme: SchemeOut, q: str) -> bool:
    if not q:
        return True
    haystack = (
        scheme.title,
        scheme.code,
        scheme.description or "",
        scheme.category or "",
        scheme.issuing_authority or "",
    )
    if any(q in field.lower() for field in haystack):
        return True
    return any(q in tag.lower() for tag in scheme.tags)


def filter_schemes(
    schemes: Iterable[SchemeOut],
    q: str = "",
    categories: Optional[Iterable[str]] = None,
    tags: Optional[Iterable[str]] = None,
    mandatory: str = "all",
) -> list[SchemeOut]:
    """
    Narrow the catalog the way the schemes page does.

    Empty ``categories`` / ``tags`` mean "no restriction"; a scheme passes the
    tag facet if it carries any of the requested tags.
    """
    if mandatory not in MANDATORY_FILTERS:
        raise ValueError(f"mandatory must be one of {MANDATORY_FILTERS}, got {mandatory!r}")

    q_lower = (q or "").strip().lower()
    cat_set = set(categories or [])
    tag_set = set(tags or [])

    out = []
    for scheme in schemes:
        if not _matches_query(scheme, q_lower):
            continue
        if cat_set and scheme.category not in cat_set:
            continue
        if tag_set and not tag_set.intersection(scheme.tags):
            continue
        if mandatory == "true" and not scheme.mandatory:
            continue
        if mandatory == "false" and scheme.mandatory:
            continue
        out.append(scheme)
    return out


def facets(schemes: Iterable[SchemeOut]) -> SchemeFacets:
    categories: set[str] = set()
    tags: set[str] = set()
    for scheme in schemes:
        if scheme.category:
            categories.add(scheme.category)
        tags.update(scheme.tags)
    return SchemeFacets(categories=sorted(categories), tags=sorted(tags))
