"""Tests for loading and validating the scenario library."""

import json

import pytest

from src.email_triage.errors import DataError
from src.email_triage.handlers.scenario_library import ScenarioLibrary
from src.email_triage.models import Scenario


def scenario_entry(scenario_id="demo", **response_fields):
    response = {"intent": "Demo", "routing": "Team", "confidence": 0.5}
    response.update(response_fields)
    return {"id": scenario_id, "input": "demo input", "response": response}


def write_library(tmp_path, document):
    path = tmp_path / "scenarios.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_packaged_library(library):
    assert len(library) == 10
    assert library.ids()[0] == "manufacturing-custom-fabrication"
    assert all(isinstance(scenario, Scenario) for scenario in library)


def test_lookup(library):
    assert "support-billing" in library
    assert library.get("support-billing").response.intent == "Billing Dispute"
    assert library.example_input("support-billing").startswith("From: sarah.chen@brightpath.io")
    assert library.example_input("nope") is None
    with pytest.raises(KeyError):
        library.get("nope")


def test_legacy_knowledge_gaps_are_normalized(library):
    gaps = library.get("account-question").response.knowledge_gaps
    assert gaps[0].description == "Weekly digest scheduling options are not described"
    assert gaps[0].confidence is None


def test_response_for_returns_a_copy(library):
    first = library.response_for("rfp-enterprise")
    first.extracted_metadata["touched"] = True
    assert "touched" not in library.get("rfp-enterprise").response.extracted_metadata


def test_load_from_path(tmp_path):
    path = write_library(tmp_path, {"scenarios": [scenario_entry("a"), scenario_entry("b")]})
    library = ScenarioLibrary.load(path)
    assert library.ids() == ["a", "b"]


def test_missing_file(tmp_path):
    with pytest.raises(DataError, match="not found"):
        ScenarioLibrary.load(tmp_path / "missing.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "scenarios.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DataError):
        ScenarioLibrary.load(path)


@pytest.mark.parametrize("document", [
    [],
    {"items": []},
    {"scenarios": {"id": "x"}},
])
def test_wrong_shape(tmp_path, document):
    with pytest.raises(DataError):
        ScenarioLibrary.load(write_library(tmp_path, document))


def test_invalid_entry_names_its_position(tmp_path):
    bad = scenario_entry("broken")
    del bad["response"]["routing"]
    path = write_library(tmp_path, {"scenarios": [scenario_entry("ok"), bad]})
    with pytest.raises(DataError, match="position 1"):
        ScenarioLibrary.load(path)


def test_out_of_range_confidence(tmp_path):
    path = write_library(tmp_path, {"scenarios": [scenario_entry("x", confidence=2)]})
    with pytest.raises(DataError):
        ScenarioLibrary.load(path)


def test_scalar_knowledge_gaps(tmp_path):
    path = write_library(tmp_path, {"scenarios": [scenario_entry("x", knowledge_gaps=5)]})
    with pytest.raises(DataError, match="position 0"):
        ScenarioLibrary.load(path)

    with pytest.raises(DataError):
        ScenarioLibrary.from_dict({"scenarios": [scenario_entry("y", knowledge_gaps=5)]})


def test_duplicate_ids(tmp_path):
    path = write_library(tmp_path, {"scenarios": [scenario_entry("x"), scenario_entry("x")]})
    with pytest.raises(DataError, match="Duplicate"):
        ScenarioLibrary.load(path)
