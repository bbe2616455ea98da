"""
Scheme suggestion scorer.

Usage:
    from scoring.evaluator import evaluate
    suggestions = evaluate(company, schemes)
    # -> [Suggestion(scheme=..., reason="Exports → EU applicability; ...",
    #                mandatory=True, score=65), ...]

Rule-based: each heuristic adds a fixed weight and an explanation. Works on
ORM rows, pydantic models or plain dicts -- anything exposing ``tags``,
``export``, ``category``, ``mandatory`` and ``title``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

MAX_SCORE = 100
FALLBACK_REASON = "Potentially relevant"

GOA_MARKERS = ("goa", "in-ga", "crz")
EPR_ROLES = ("producer", "brandowner", "importer")
DISCLOSURE_BUYERS = ("cdp", "gri", "ifrs")


@dataclass(frozen=True)
class ScoringWeights:
    exporter_eu: int = 40
    cbam_family: int = 25
    goa_coastal: int = 45
    epr: int = 40
    iso_management: int = 20
    product_compliance: int = 20
    disclosure: int = 25
    scheme_mandatory: int = 10


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass
class Suggestion:
    scheme: Any
    reason: str
    mandatory: bool
    score: int


def _field(obj: Any, name: str, default=None):
    if isinstance(obj, dict):
        value = obj.get(name, default)
    else:
        value = getattr(obj, name, default)
    return default if value is None else value


def _lower_tags(obj: Any) -> set[str]:
    return {str(t).lower() for t in _field(obj, "tags", []) if t is not None}


def _company_exports(company: Any) -> bool:
    # ORM/pydantic models call the flag ``exporter``; raw payloads use ``export``
    if isinstance(company, dict):
        return bool(company.get("export", company.get("exporter")))
    return bool(getattr(company, "exporter", None) or getattr(company, "export", None))


def _score_scheme(
    scheme: Any,
    company_tags: set[str],
    is_goa: bool,
    is_exporter: bool,
    weights: ScoringWeights,
) -> tuple[int, bool, list[str]]:
    tags = _lower_tags(scheme)
    category = str(_field(scheme, "category", "")).lower()

    score = 0
    mandatory = False
    reasons: list[str] = []

    is_eu = "eu" in tags or "(eu)" in category
    is_goa_tagged = "goa" in tags or "goa" in category or "coastal/crz" in category
    is_india = "india" in tags or "(india)" in category

    if is_exporter and is_eu:
        score += weights.exporter_eu
        reasons.append("Exports → EU applicability")
        if "cbam" in tags or "trade & carbon" in category:
            score += weights.cbam_family
            reasons.append("Trade & carbon mechanism likely relevant (CBAM family)")

    # Goa is an Indian state: Goa/coastal schemes need no separate India marker here
    if (is_india or is_goa_tagged) and is_goa and is_goa_tagged:
        score += weights.goa_coastal
        reasons.append("Goa / CRZ presence → coastal & state regulations apply")
        mandatory = True

    if is_india and company_tags.intersection(EPR_ROLES):
        if "epr" in tags or "epr" in category:
            score += weights.epr
            reasons.append("Producer/Importer/Brand Owner → EPR obligations")
            mandatory = True

    if "manufacturing" in company_tags:
        if "management systems (iso)" in category:
            score += weights.iso_management
            reasons.append("Manufacturing → ISO management systems beneficial")
        if "product compliance" in category or "bis" in tags or "ce" in tags:
            score += weights.product_compliance
            reasons.append("Manufacturing → product compliance likely needed")

    if company_tags.intersection(DISCLOSURE_BUYERS):
        if "disclosure" in category or "disclosure" in tags:
            score += weights.disclosure
            reasons.append("Buyer requirements → disclosure frameworks relevant")

    if _field(scheme, "mandatory", False):
        score += weights.scheme_mandatory

    return score, mandatory, reasons


def _sort_key(suggestion: Suggestion):
    # plain str order on titles: upper case sorts before lower case, no locale collation
    return (
        not suggestion.mandatory,
        -suggestion.score,
        str(_field(suggestion.scheme, "title", "")),
    )


def evaluate(
    company: Any,
    schemes: Iterable[Any],
    weights: Optional[ScoringWeights] = None,
) -> list[Suggestion]:
    """
    Rank the schemes that apply to ``company``.

    Every scheme is scored independently; those with a positive score are
    returned mandatory-first, then by score (desc), then by title.
    """
    weights = weights or DEFAULT_WEIGHTS
    company_tags = _lower_tags(company)
    is_goa = bool(company_tags.intersection(GOA_MARKERS))
    is_exporter = _company_exports(company)

    out: list[Suggestion] = []
    for scheme in schemes:
        score, mandatory, reasons = _score_scheme(
            scheme, company_tags, is_goa, is_exporter, weights
        )
        if score <= 0:
            continue
        out.append(
            Suggestion(
                scheme=scheme,
                reason="; ".join(reasons) if reasons else FALLBACK_REASON,
                mandatory=bool(_field(scheme, "mandatory", False)) or mandatory,
                score=min(MAX_SCORE, score),
            )
        )

    out.sort(key=_sort_key)
    return out
