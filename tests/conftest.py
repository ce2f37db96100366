from __future__ import annotations

import json
from typing import Any, Dict

import pytest
from bs4 import BeautifulSoup

from ixtable.facts import Fact, FactStore, Taxonomy


CONCEPTS: Dict[str, Any] = {
    "us-gaap:Revenues": {
        "labels": {
            "std": {"en": "Revenues"},
            "doc": {"en": "Amount of revenue recognized."},
        }
    },
    "us-gaap:CostOfRevenue": {"labels": {"std": {"en-us": "Cost of revenue"}}},
    "us-gaap:StatementBusinessSegmentsAxis": {"labels": {"std": {"en": "Segments"}}},
    "acme:CloudMember": {"labels": {"std": {"en": "Cloud"}}},
}

FACTS: Dict[str, Any] = {
    "f1": {"c": "us-gaap:Revenues", "p": "2023", "u": "USD", "v": 100},
    "f2": {"c": "us-gaap:Revenues", "p": "2022", "u": "USD", "v": 90},
    "f3": {"c": "us-gaap:CostOfRevenue", "p": "2023", "u": "USD", "v": -40},
    "f4": {"c": "us-gaap:CostOfRevenue", "p": "2022", "u": "USD", "v": 35},
    "f5": {
        "c": "us-gaap:Revenues",
        "p": "2023",
        "u": "USD",
        "d": {"us-gaap:StatementBusinessSegmentsAxis": "acme:CloudMember"},
        "v": "1234.5",
    },
}


@pytest.fixture
def taxonomy_data() -> Dict[str, Any]:
    return {"concepts": json.loads(json.dumps(CONCEPTS)), "facts": json.loads(json.dumps(FACTS))}


@pytest.fixture
def store(taxonomy_data) -> FactStore:
    return FactStore.from_dict(taxonomy_data)


@pytest.fixture
def taxonomy() -> Taxonomy:
    return Taxonomy(CONCEPTS)


def make_fact(fact_id: str, value: Any = None, taxonomy: Taxonomy = None, **aspects: Any) -> Fact:
    return Fact(fact_id, aspects, value, taxonomy=taxonomy)


def parse_table(html: str):
    soup = BeautifulSoup(html, "lxml")
    return soup.find("table")


def ix(fact_id: str, text: str) -> str:
    return f'<span class="ixbrl-element" data-ivid="{fact_id}">{text}</span>'


STATEMENT_HTML = (
    "<table>"
    "<tr><td></td><td>2023</td><td>2022</td></tr>"
    f"<tr><td>Revenues</td><td>{ix('f1', '100')}</td><td>{ix('f2', '90')}</td></tr>"
    f"<tr><td>Cost of revenue</td><td style=\"border-bottom: 1px solid black\">({ix('f3', '40')})</td>"
    f"<td style=\"border-bottom: 1px solid black\">({ix('f4', '35')})</td></tr>"
    "</table>"
)


def document_html(taxonomy_data: Dict[str, Any]) -> str:
    return (
        "<html><head>"
        f'<script id="taxonomy-data" type="application/json">{json.dumps(taxonomy_data)}</script>'
        "</head><body>"
        "<table><tr><td>Cover page</td><td>Acme Corp</td></tr></table>"
        f"{STATEMENT_HTML}"
        "</body></html>"
    )
