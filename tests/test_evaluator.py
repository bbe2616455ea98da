import copy
from types import SimpleNamespace

import pytest

from backend.seed import SCHEMES_SEED
from scoring.evaluator import FALLBACK_REASON, ScoringWeights, evaluate


def scheme(title="Scheme", category="", tags=None, mandatory=False, code=None):
    return {
        "code": code or title.upper(),
        "title": title,
        "category": category,
        "tags": tags if tags is not None else [],
        "mandatory": mandatory,
    }


def company(tags=None, export=False):
    return {"tags": tags or [], "export": export}


# ---------------------------------------------------------------------------
# Worked cases
# ---------------------------------------------------------------------------

def test_exporter_cbam_family():
    s = scheme(category="Trade & Carbon (EU)", tags=["eu", "cbam"])
    [out] = evaluate(company(["exporter"], export=True), [s])
    assert out.score == 65
    assert "EU applicability" in out.reason
    assert "CBAM family" in out.reason
    assert out.mandatory is False


def test_export_flag_alone_is_enough():
    s = scheme(category="Trade & Carbon (EU)", tags=["eu", "cbam"])
    [out] = evaluate(company(export=True), [s])
    assert out.score == 65


def test_goa_coastal_forces_mandatory():
    s = scheme(category="Coastal/CRZ (Goa)", tags=["goa", "crz"])
    [out] = evaluate(company(["goa"]), [s])
    assert out.score == 45
    assert out.mandatory is True
    assert out.reason == "Goa / CRZ presence → coastal & state regulations apply"


def test_mandatory_scheme_without_rules_gets_fallback_reason():
    s = scheme(category="Chemicals", tags=["chemicals"], mandatory=True)
    [out] = evaluate(company(), [s])
    assert out.score == 10
    assert out.mandatory is True
    assert out.reason == FALLBACK_REASON


def test_unrelated_scheme_is_excluded():
    s = scheme(category="Unrelated")
    assert evaluate(company(), [s]) == []


def test_manufacturing_iso():
    s = scheme(category="Management Systems (ISO)")
    [out] = evaluate(company(["manufacturing"]), [s])
    assert out.score == 20
    assert out.reason == "Manufacturing → ISO management systems beneficial"


# ---------------------------------------------------------------------------
# Individual rules
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("role", ["producer", "BrandOwner", "importer"])
def test_epr_obligations(role):
    s = scheme(category="EPR & Waste (India)", tags=["plastic"])
    [out] = evaluate(company([role]), [s])
    assert out.score == 40
    assert out.mandatory is True
    assert "EPR obligations" in out.reason


def test_epr_requires_india_relevance():
    s = scheme(category="EPR (EU)", tags=["epr"])
    assert evaluate(company(["producer"]), [s]) == []


def test_goa_scheme_without_india_marker_has_no_epr():
    s = scheme(category="Goa Environmental", tags=["goa", "epr"])
    assert evaluate(company(["producer"]), [s]) == []


def test_goa_markers_on_company():
    s = scheme(category="Goa Environmental", tags=["india"])
    for marker in ("goa", "IN-GA", "crz"):
        [out] = evaluate(company([marker]), [s])
        assert out.score == 45


def test_manufacturing_rules_stack():
    s = scheme(category="Management Systems (ISO) / Product Compliance", tags=["bis"])
    [out] = evaluate(company(["manufacturing"]), [s])
    assert out.score == 40
    assert out.reason == (
        "Manufacturing → ISO management systems beneficial; "
        "Manufacturing → product compliance likely needed"
    )


@pytest.mark.parametrize("tag", ["bis", "CE"])
def test_product_compliance_by_tag(tag):
    [out] = evaluate(company(["manufacturing"]), [scheme(tags=[tag])])
    assert out.score == 20


@pytest.mark.parametrize("buyer", ["cdp", "gri", "ifrs"])
def test_buyer_disclosure(buyer):
    s = scheme(category="Disclosure (Global)")
    [out] = evaluate(company([buyer]), [s])
    assert out.score == 25
    assert out.reason == "Buyer requirements → disclosure frameworks relevant"


def test_eu_rule_needs_exporter():
    s = scheme(category="Trade & Carbon (EU)", tags=["eu", "cbam"])
    assert evaluate(company(["cbam"], export=False), [s]) == []


def test_score_is_clamped():
    s = scheme(category="Trade & Carbon (EU)", tags=["eu", "cbam", "goa"], mandatory=True)
    [out] = evaluate(company(["goa"], export=True), [s])
    # 40 + 25 + 45 + 10 = 120
    assert out.score == 100
    assert out.mandatory is True


def test_custom_weights():
    s = scheme(category="Management Systems (ISO)", mandatory=True)
    [out] = evaluate(company(["manufacturing"]), [s], weights=ScoringWeights(iso_management=5, scheme_mandatory=1))
    assert out.score == 6


# ---------------------------------------------------------------------------
# Input shapes
# ---------------------------------------------------------------------------

def test_missing_fields_do_not_raise():
    schemes = [
        {"title": "No fields"},
        {"title": "Nulls", "tags": None, "category": None, "mandatory": None},
    ]
    assert evaluate({"tags": None, "export": None}, schemes) == []


def test_attribute_objects_are_supported():
    s = SimpleNamespace(title="ISO", category="Management Systems (ISO)", tags=None, mandatory=False)
    c = SimpleNamespace(tags=["Manufacturing"], exporter=False)
    [out] = evaluate(c, [s])
    assert out.scheme is s
    assert out.score == 20


def test_inputs_are_not_mutated():
    c = company(["Goa", "manufacturing"], export=True)
    schemes = copy.deepcopy(SCHEMES_SEED)
    before = (copy.deepcopy(c), copy.deepcopy(schemes))
    evaluate(c, schemes)
    assert (c, schemes) == before


# ---------------------------------------------------------------------------
# Properties over the starter catalog
# ---------------------------------------------------------------------------

PROFILES = [
    company(),
    company(export=True),
    company(["goa", "producer"]),
    company(["manufacturing", "cdp"], export=True),
    company(["in-ga", "importer", "gri", "manufacturing"], export=True),
]


@pytest.mark.parametrize("profile", PROFILES)
def test_catalog_properties(profile):
    out = evaluate(profile, SCHEMES_SEED)

    assert out == evaluate(profile, SCHEMES_SEED)
    assert all(0 < s.score <= 100 for s in out)
    for s in out:
        if s.scheme["mandatory"]:
            assert s.mandatory

    for a, b in zip(out, out[1:]):
        key_a = (not a.mandatory, -a.score, a.scheme["title"])
        key_b = (not b.mandatory, -b.score, b.scheme["title"])
        assert key_a <= key_b

    # every mandatory scheme scores at least the flat bump, so it always shows up
    codes = {s.scheme["code"] for s in out}
    assert {s["code"] for s in SCHEMES_SEED if s["mandatory"]} <= codes


def test_catalog_ranking_for_exporting_manufacturer():
    out = evaluate(company(["manufacturing"], export=True), SCHEMES_SEED)
    assert [(s.scheme["code"], s.score) for s in out] == [
        ("EU-CBAM", 75),
        ("EU-ROHS", 70),
        ("EU-EUDR", 50),
        ("EU-REACH", 50),
        ("EU-WEEE", 50),
        ("BRSR", 10),
        ("GOA-CRZ", 10),
        ("GOA-CZMP", 10),
        ("ISO-14001", 20),
        ("ISO-45001", 20),
        ("ISO-9001", 20),
    ]
