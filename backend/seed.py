"""Starter scheme catalog and explicit relations, keyed by scheme code."""

from __future__ import annotations

SCHEMES_SEED = [
    # ------- Core global/accounting/targets -------
    {
        "code": "GHG",
        "title": "GHG Protocol — Corporate Accounting Standard",
        "category": "Carbon Accounting (Global)",
        "tags": ["global", "carbon-accounting", "ghg", "scope1", "scope2", "scope3"],
        "mandatory": False,
    },
    {
        "code": "GRI",
        "title": "GRI Standards — Sustainability Reporting",
        "category": "Disclosure (Global)",
        "tags": ["global", "disclosure", "reporting", "materiality"],
        "mandatory": False,
    },
    {
        "code": "IFRS-S1S2",
        "title": "IFRS S1/S2 — Sustainability/Climate Disclosure",
        "category": "Disclosure (Global)",
        "tags": ["global", "investor", "disclosure", "climate"],
        "mandatory": False,
    },
    {
        "code": "SBTI",
        "title": "Science Based Targets initiative (SBTi) — Targets",
        "category": "Carbon Targets (Global)",
        "tags": ["global", "targets", "ghg", "net-zero"],
        "mandatory": False,
    },
    # ------- ISO management standards -------
    {
        "code": "ISO-14001",
        "title": "ISO 14001 — Environmental Management",
        "category": "Management Systems (ISO)",
        "tags": ["iso", "environment", "management-system"],
        "mandatory": False,
    },
    {
        "code": "ISO-9001",
        "title": "ISO 9001 — Quality Management",
        "category": "Management Systems (ISO)",
        "tags": ["iso", "quality", "management-system"],
        "mandatory": False,
    },
    {
        "code": "ISO-45001",
        "title": "ISO 45001 — Occupational Health & Safety",
        "category": "Management Systems (ISO)",
        "tags": ["iso", "oh&s", "safety", "management-system"],
        "mandatory": False,
    },
    # ------- EU / product compliance -------
    {
        "code": "EU-REACH",
        "title": "EU REACH — Chemicals",
        "category": "Chemicals (EU)",
        "tags": ["eu", "chemicals", "substances", "reach"],
        "mandatory": True,
    },
    {
        "code": "EU-ROHS",
        "title": "EU RoHS — Hazardous Substances in Electronics",
        "category": "Product Compliance (India)",
        "tags": ["electronics", "hazardous", "rohs", "eu"],
        "mandatory": True,
    },
    {
        "code": "EU-WEEE",
        "title": "EU WEEE — Waste Electrical & Electronic Equipment",
        "category": "EPR & Waste (India)",
        "tags": ["eu", "electronics", "e-waste", "producer"],
        "mandatory": True,
    },
    {
        "code": "EU-EUDR",
        "title": "EU Deforestation Regulation",
        "category": "Due Diligence (EU)",
        "tags": ["eu", "deforestation", "supply-chain", "due-diligence"],
        "mandatory": True,
    },
    # ------- India / regulatory -------
    {
        "code": "BRSR",
        "title": "Business Responsibility and Sustainability Reporting (BRSR)",
        "category": "Regulatory Frameworks (India)",
        "tags": ["india", "sebi", "brsr", "disclosure", "reporting"],
        "mandatory": True,
    },
    {
        "code": "TEAM",
        "title": "TEAM — Technology & Energy Audit for MSMEs",
        "category": "Enablement/Certification (India)",
        "tags": ["india", "msme", "energy", "enablement"],
        "mandatory": False,
    },
    # ------- Trade & Carbon (EU) -------
    {
        "code": "EU-CBAM",
        "title": "EU CBAM — Carbon Border Adjustment Mechanism",
        "category": "Trade & Carbon (EU)",
        "tags": ["eu", "carbon", "border", "export", "cbam"],
        "mandatory": True,
    },
    # ------- Goa / Coastal -------
    {
        "code": "GOA-CZMP",
        "title": "Goa Coastal Zone Management Plan (CZMP)",
        "category": "Goa Environmental",
        "tags": ["goa", "coastal", "czmp", "environment"],
        "mandatory": True,
    },
    {
        "code": "GOA-CRZ",
        "title": "Coastal Regulation Zone (CRZ) — Goa",
        "category": "Coastal/CRZ (Goa)",
        "tags": ["goa", "coastal", "crz", "clearance"],
        "mandatory": True,
    },
]

RELATIONS_SEED = [
    {"from_code": "EU-CBAM", "to_code": "GHG", "type": "REQUIRES", "note": "CBAM needs embedded emission data."},
    {"from_code": "IFRS-S1S2", "to_code": "GRI", "type": "ALIGNS_WITH"},
    {"from_code": "BRSR", "to_code": "GRI", "type": "ALIGNS_WITH"},
    {"from_code": "BRSR", "to_code": "IFRS-S1S2", "type": "ALIGNS_WITH"},
    {"from_code": "EU-ROHS", "to_code": "EU-REACH", "type": "ALIGNS_WITH", "note": "Both regulate hazardous substances; scopes differ."},
    {"from_code": "EU-WEEE", "to_code": "EU-ROHS", "type": "ALIGNS_WITH"},
    {"from_code": "ISO-14001", "to_code": "BRSR", "type": "ALIGNS_WITH"},
    {"from_code": "ISO-9001", "to_code": "BRSR", "type": "ALIGNS_WITH"},
    {"from_code": "ISO-45001", "to_code": "BRSR", "type": "ALIGNS_WITH"},
]
