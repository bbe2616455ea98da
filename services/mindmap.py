"""
GodMode mindmap -- scheme graph for the force-directed visualisation.

Nodes are schemes; links are the explicit relations stored in the DB plus
"soft" similarity links between schemes of different categories that share
tags. ``layout`` runs a spring (Fruchterman-Reingold) simulation with
networkx so clients can render a stable picture without their own physics.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import networkx as nx

from backend.schemas import (
    MindmapLink,
    MindmapNode,
    MindmapResponse,
    RelationOut,
    SchemeOut,
)

logger = logging.getLogger(__name__)

CATEGORY_COLORS = {
    "Regulatory Frameworks (India)": "#ffb020",
    "EPR & Waste (India)": "#7dd87d",
    "Product Compliance (India)": "#e879f9",
    "Goa Environmental": "#5eead4",
    "Coastal/CRZ (Goa)": "#fb7185",
    "Trade & Carbon (EU)": "#60a5fa",
    "Due Diligence (EU)": "#f59e0b",
    "EEE Compliance (EU)": "#a78bfa",
    "Disclosure (Global)": "#34d399",
    "Management Systems (ISO)": "#f472b6",
    "Carbon Accounting (Global)": "#38bdf8",
    "Carbon Targets (Global)": "#22d3ee",
    "Enablement/Certification (India)": "#fbbf24",
}
DEFAULT_COLOR = "#8b9bff"

MAX_WHY_TAGS = 3

# Spring attraction: explicit relations pull harder than shared-tag links
EXPLICIT_LINK_WEIGHT = 1.4
SIMILARITY_LINK_WEIGHT = 1.0
LAYOUT_SEED = 42
LAYOUT_ITERATIONS = 80


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(category, DEFAULT_COLOR)


def build_graph(
    schemes: Iterable[SchemeOut],
    relations: Optional[Iterable[RelationOut]] = None,
) -> MindmapResponse:
    schemes = list(schemes)
    known_ids = {s.id for s in schemes}

    nodes = [
        MindmapNode(
            id=s.id,
            name=s.title,
            category=s.category,
            mandatory=s.mandatory,
            tags=[t.lower() for t in s.tags],
            color=category_color(s.category),
        )
        for s in schemes
    ]

    links: list[MindmapLink] = []
    for rel in relations or []:
        if rel.from_id not in known_ids or rel.to_id not in known_ids:
            logger.debug("Dropping relation %s with unknown endpoint", rel.id)
            continue
        links.append(MindmapLink(source=rel.from_id, target=rel.to_id, type=rel.type, note=rel.note))

    joined = {(l.source, l.target) for l in links}
    for i, a in enumerate(nodes):
        if not a.tags:
            continue
        for b in nodes[i + 1:]:
            if not b.tags or a.category == b.category:
                continue
            overlap = [t for t in a.tags if t in b.tags]
            if not overlap:
                continue
            if (a.id, b.id) in joined or (b.id, a.id) in joined:
                continue
            links.append(MindmapLink(source=a.id, target=b.id, why=overlap[:MAX_WHY_TAGS]))

    degree = {n.id: 0 for n in nodes}
    for link in links:
        degree[link.source] = degree.get(link.source, 0) + 1
        degree[link.target] = degree.get(link.target, 0) + 1

    categories = sorted({n.category for n in nodes})
    return MindmapResponse(nodes=nodes, links=links, degree=degree, categories=categories)


def _initial_positions(graph: MindmapResponse) -> dict[str, tuple[float, float]]:
    """One column per category so clusters separate before the simulation runs."""
    cols = max(1, len(graph.categories))
    step = 2.0 / (cols - 1) if cols > 1 else 0.0
    per_column: dict[str, int] = {}
    pos = {}
    for node in graph.nodes:
        idx = graph.categories.index(node.category)
        row = per_column.get(node.category, 0)
        per_column[node.category] = row + 1
        pos[node.id] = (-1.0 + idx * step, 0.1 * row)
    return pos


def layout(graph: MindmapResponse, cluster: bool = True) -> MindmapResponse:
    """Fill in node ``x``/``y`` (range roughly [-1, 1]) using a spring layout."""
    if not graph.nodes:
        return graph

    g = nx.Graph()
    g.add_nodes_from(n.id for n in graph.nodes)
    for link in graph.links:
        weight = EXPLICIT_LINK_WEIGHT if link.type else SIMILARITY_LINK_WEIGHT
        g.add_edge(link.source, link.target, weight=weight)

    positions = nx.spring_layout(
        g,
        pos=_initial_positions(graph) if cluster else None,
        weight="weight",
        iterations=LAYOUT_ITERATIONS,
        seed=LAYOUT_SEED,
    )

    nodes = [
        n.model_copy(update={"x": float(positions[n.id][0]), "y": float(positions[n.id][1])})
        for n in graph.nodes
    ]
    return graph.model_copy(update={"nodes": nodes})
