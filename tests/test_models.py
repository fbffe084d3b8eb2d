"""Tests for the shared pydantic models."""

import pytest
from pydantic import ValidationError

from src.email_triage.models import (
    AgentClientConfig,
    AgentMode,
    AgentResponse,
    EmailAnalysis,
    KnowledgeGap,
    normalize_knowledge_gaps,
)


def minimal_response(**fields):
    return AgentResponse(**{"intent": "X", "routing": "Y", "confidence": 0.5, **fields})


class TestKnowledgeGaps:
    def test_none_becomes_empty(self):
        assert normalize_knowledge_gaps(None) == []
        assert minimal_response(knowledge_gaps=None).knowledge_gaps == []

    def test_legacy_strings(self):
        response = minimal_response(knowledge_gaps=["No warranty terms", "No lead times"])
        assert response.knowledge_gaps == [
            KnowledgeGap(description="No warranty terms"),
            KnowledgeGap(description="No lead times"),
        ]

    def test_single_string_is_wrapped(self):
        assert normalize_knowledge_gaps("Only one") == [{"description": "Only one"}]

    def test_mixed_forms(self):
        response = minimal_response(knowledge_gaps=[
            "Plain",
            {"description": "Detailed", "confidence": 0.6, "gap_reason": "Missing table"},
        ])
        assert response.knowledge_gaps[0].confidence is None
        assert response.knowledge_gaps[1].gap_reason == "Missing table"

    def test_object_form_survives_round_trip(self):
        response = minimal_response(knowledge_gaps=["Plain"])
        again = AgentResponse.model_validate(response.model_dump())
        assert again.knowledge_gaps == response.knowledge_gaps

    def test_unsupported_entry(self):
        with pytest.raises(ValueError):
            normalize_knowledge_gaps([42])
        with pytest.raises(ValidationError):
            minimal_response(knowledge_gaps=[42])

    @pytest.mark.parametrize("value", [5, 2.5, True])
    def test_scalar_value_is_a_validation_error(self, value):
        with pytest.raises(ValueError, match="Unsupported knowledge gaps value"):
            normalize_knowledge_gaps(value)
        with pytest.raises(ValidationError):
            minimal_response(knowledge_gaps=value)


class TestAgentResponse:
    def test_effective_confidences_fall_back_only_when_missing(self):
        response = minimal_response(confidence=0.7)
        assert response.effective_intent_confidence == 0.7
        assert response.effective_routing_confidence == 0.7

        zero = minimal_response(confidence=0.7, intent_confidence=0.0, routing_confidence=0.0)
        assert zero.effective_intent_confidence == 0.0
        assert zero.effective_routing_confidence == 0.0

    def test_null_collections_default_to_empty(self):
        response = minimal_response(items=None, kb_matches=None, extracted_metadata=None)
        assert response.items == []
        assert response.kb_matches == []
        assert response.extracted_metadata == {}

    def test_unknown_fields_are_kept(self):
        response = AgentResponse.model_validate({
            "intent": "X", "routing": "Y", "confidence": 0.5, "trace_id": "abc"
        })
        assert response.model_dump()["trace_id"] == "abc"

    @pytest.mark.parametrize("missing", ["intent", "routing", "confidence"])
    def test_required_fields(self, missing):
        payload = {"intent": "X", "routing": "Y", "confidence": 0.5}
        del payload[missing]
        with pytest.raises(ValidationError):
            AgentResponse.model_validate(payload)

    def test_confidence_range(self):
        with pytest.raises(ValidationError):
            minimal_response(confidence=1.5)

    def test_frozen(self):
        with pytest.raises(ValidationError):
            minimal_response().intent = "Changed"


class TestEmailAnalysis:
    def test_defaults(self):
        analysis = EmailAnalysis()
        assert analysis.sentiment == "neutral"
        assert analysis.urgency == "medium"
        assert analysis.category == "General Inquiry"
        assert analysis.required_actions == ["Review customer inquiry", "Provide appropriate response"]

    def test_limits(self):
        with pytest.raises(ValidationError):
            EmailAnalysis(key_points=["a", "b", "c", "d"])
        with pytest.raises(ValidationError):
            EmailAnalysis(required_actions=[])
        with pytest.raises(ValidationError):
            EmailAnalysis(sentiment="furious")


def test_client_config_updated():
    config = AgentClientConfig(endpoint="https://agent.example.com", api_key="k")
    live = config.updated(mode="live")
    assert live.mode is AgentMode.LIVE
    assert live.endpoint == "https://agent.example.com"
    assert config.mode is AgentMode.SIMULATED
