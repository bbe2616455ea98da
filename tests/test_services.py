import asyncio

import pytest

from backend.import_schemes import import_schemes, load_scheme_rows, seed_catalog
from backend.schemas import RelationOut, SchemeOut
from services.catalog import facets, filter_schemes
from services.mindmap import DEFAULT_COLOR, build_graph, category_color, layout


def make_scheme(code, category, tags, mandatory=False, **extra):
    return SchemeOut(id=code.lower(), code=code, title=f"{code} title", category=category,
                     tags=tags, mandatory=mandatory, **extra)


CATALOG = [
    make_scheme("A", "Disclosure (Global)", ["disclosure", "global"]),
    make_scheme("B", "Disclosure (Global)", ["disclosure"], mandatory=True),
    make_scheme("C", "Regulatory Frameworks (India)", ["india", "disclosure", "brsr", "sebi"],
                issuing_authority="SEBI"),
    make_scheme("D", "Goa Environmental", ["goa"], description="Coastal zone plan"),
]


# ---------------------------------------------------------------------------
# Catalog search
# ---------------------------------------------------------------------------

def test_query_matches_any_text_field():
    assert [s.code for s in filter_schemes(CATALOG, q="SEBI")] == ["C"]
    assert [s.code for s in filter_schemes(CATALOG, q="coastal")] == ["D"]
    assert [s.code for s in filter_schemes(CATALOG, q="brs")] == ["C"]
    assert len(filter_schemes(CATALOG, q="  ")) == 4


def test_facet_filters_combine():
    out = filter_schemes(CATALOG, categories=["Disclosure (Global)"], mandatory="false")
    assert [s.code for s in out] == ["A"]
    out = filter_schemes(CATALOG, tags=["goa", "sebi"])
    assert [s.code for s in out] == ["C", "D"]


def test_invalid_mandatory_filter():
    with pytest.raises(ValueError):
        filter_schemes(CATALOG, mandatory="yes")


def test_facets_sorted_unique():
    result = facets(CATALOG)
    assert result.categories == [
        "Disclosure (Global)", "Goa Environmental", "Regulatory Frameworks (India)",
    ]
    assert result.tags == ["brsr", "disclosure", "global", "goa", "india", "sebi"]


# ---------------------------------------------------------------------------
# Mindmap
# ---------------------------------------------------------------------------

def test_similarity_links_only_across_categories():
    graph = build_graph(CATALOG)
    pairs = {(l.source, l.target) for l in graph.links}
    # A and B share "disclosure" but sit in the same category
    assert ("a", "b") not in pairs
    assert ("a", "c") in pairs and ("b", "c") in pairs
    link = next(l for l in graph.links if (l.source, l.target) == ("a", "c"))
    assert link.type is None
    assert link.why == ["disclosure"]


def test_explicit_relation_suppresses_similarity_link():
    rel = RelationOut(id=1, from_id="c", to_id="a", type="ALIGNS_WITH")
    graph = build_graph(CATALOG, [rel])
    between = [l for l in graph.links if {l.source, l.target} == {"a", "c"}]
    assert len(between) == 1
    assert between[0].type == "ALIGNS_WITH"
    assert graph.degree["c"] == 2


def test_relation_to_unknown_scheme_is_dropped():
    rel = RelationOut(id=1, from_id="a", to_id="zzz", type="REQUIRES")
    graph = build_graph(CATALOG, [rel])
    assert all(l.target != "zzz" for l in graph.links)


def test_why_is_capped_at_three_tags():
    schemes = [
        make_scheme("X", "One", ["t1", "t2", "t3", "t4"]),
        make_scheme("Y", "Two", ["t1", "t2", "t3", "t4"]),
    ]
    [link] = build_graph(schemes).links
    assert link.why == ["t1", "t2", "t3"]


def test_category_colors():
    assert category_color("Coastal/CRZ (Goa)") == "#fb7185"
    assert category_color("Something new") == DEFAULT_COLOR


def test_layout_is_deterministic():
    graph = build_graph(CATALOG)
    first = layout(graph)
    second = layout(graph)
    assert [(n.x, n.y) for n in first.nodes] == [(n.x, n.y) for n in second.nodes]
    assert all(n.x is not None for n in first.nodes)
    assert all(n.x is None for n in graph.nodes)


def test_layout_empty_graph():
    graph = build_graph([])
    assert layout(graph).nodes == []


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------

def test_load_csv_rows(tmp_path):
    path = tmp_path / "schemes.csv"
    path.write_text(
        "code,title,category,mandatory,tags,features,references\n"
        'PWM,Plastic Waste Management,EPR & Waste (India),yes,india; epr ;plastic,Register on portal,'
        '"[{""label"": ""CPCB"", ""url"": ""https://cpcb.nic.in""}]"\n'
        "ZED,ZED Certification,Enablement/Certification (India),no,india;msme,,\n",
        encoding="utf-8",
    )
    rows = load_scheme_rows(path)
    assert rows[0]["tags"] == ["india", "epr", "plastic"]
    assert rows[0]["mandatory"] is True
    assert rows[0]["references"][0]["label"] == "CPCB"
    assert rows[1]["mandatory"] is False
    assert rows[1]["features"] == []


def test_csv_row_with_bad_references_is_skipped(tmp_path, repo):
    path = tmp_path / "schemes.csv"
    path.write_text(
        "code,title,references\n"
        "A,Good scheme,\n"
        "B,Bad scheme,not-json\n",
        encoding="utf-8",
    )
    rows = load_scheme_rows(path)
    assert [r["code"] for r in rows] == ["A"]
    assert asyncio.run(import_schemes(repo, rows)) == 1
    assert asyncio.run(repo.get_scheme("B")) is None


def test_load_json_requires_array(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"code": "X"}', encoding="utf-8")
    with pytest.raises(ValueError):
        load_scheme_rows(path)


def test_import_skips_invalid_rows(repo):
    rows = [
        {"code": "OK", "title": "Valid"},
        {"code": "NO-TITLE"},
    ]
    assert asyncio.run(import_schemes(repo, rows)) == 1
    assert asyncio.run(repo.count_schemes()) == 1


def test_seed_is_idempotent(repo):
    asyncio.run(seed_catalog(repo))
    schemes, relations = asyncio.run(seed_catalog(repo))
    assert schemes == 16
    assert relations == 9
    assert asyncio.run(repo.count_schemes()) == 16
    assert len(asyncio.run(repo.list_relations())) == 9
