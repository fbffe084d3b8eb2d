"""
Tests for TriageEngine.

Simulated mode must be deterministic and total; live mode must hand the
call to the gateway built from the client configuration.
"""

from unittest.mock import MagicMock, patch

import pytest

from src.email_triage import (
    AgentClientConfig,
    AgentMode,
    AgentResponse,
    ConfigurationError,
    TriageEngine,
)
from src.email_triage.errors import DataError
from src.email_triage.handlers.scenario_library import ScenarioLibrary

SENTIMENTS = {"positive", "neutral", "negative", "urgent"}
URGENCIES = {"low", "medium", "high", "critical"}


def test_classification_is_deterministic(engine, library):
    inputs = [scenario.input for scenario in library] + [
        "Please send me a price quote for your services",
        "",
        "From: x@y.io\nSubject: hi\n\nnothing here",
    ]
    for text in inputs:
        assert engine.classify(text) == engine.classify(text)


def test_example_inputs_return_their_scenario(engine, library):
    for scenario in library:
        assert engine.classify(scenario.input).intent == scenario.response.intent


@pytest.mark.parametrize("scenario_id,sentiment,urgency,category", [
    ("support-billing", "negative", "high", "Billing"),
    ("technical-support", "urgent", "critical", "Technical Support"),
    ("feature-request", "positive", "medium", "Feature Request"),
    ("account-question", "neutral", "low", "Account Management"),
])
def test_email_scenarios_carry_fresh_analysis(engine, library, scenario_id, sentiment, urgency, category):
    response = engine.classify(library.example_input(scenario_id))
    analysis = response.email_analysis

    assert analysis.sentiment == sentiment
    assert analysis.urgency == urgency
    assert analysis.category == category


def test_account_question_actions(engine, library):
    response = engine.classify(library.example_input("account-question"))
    assert response.email_analysis.required_actions == ["Update account details"]


def test_fallback_for_unmatched_input(engine):
    response = engine.classify("Please send me a price quote for your services")
    assert response.intent == "Pricing Inquiry"
    assert response.routing == "Customer Support > General Team"
    assert len(response.kb_matches) == 1
    assert len(response.knowledge_gaps) == 2
    assert response.email_analysis is None


@pytest.mark.parametrize("text", [
    "",
    None,
    "   ",
    "!!!",
    "From:",
    "a" * 5000,
    "Subject: ???\n\n$ $ $ 0 units",
    "ünïcödé ✓ text – with dashes",
])
def test_classification_never_fails(engine, text):
    response = engine.classify(text)
    assert isinstance(response, AgentResponse)
    assert 0.0 <= response.confidence <= 1.0
    if response.email_analysis is not None:
        assert response.email_analysis.sentiment in SENTIMENTS
        assert response.email_analysis.urgency in URGENCIES


def test_analyze_simulated_accepts_string_mode(engine, library):
    response = engine.analyze(library.example_input("rfp-enterprise"), mode="simulated")
    assert response.intent == "Enterprise RFP"


def test_analyze_live_uses_gateway(library):
    gateway = MagicMock()
    gateway.analyze.return_value = AgentResponse(intent="Live", routing="Remote", confidence=0.6)
    factory = MagicMock(return_value=gateway)
    engine = TriageEngine(library, gateway_factory=factory, delay_window=(0.0, 0.0))

    config = AgentClientConfig(endpoint="https://agent.example.com", api_key="key")
    response = engine.analyze("hello", AgentMode.LIVE, config)

    assert response.intent == "Live"
    built_config = factory.call_args[0][0]
    assert built_config.mode is AgentMode.LIVE
    assert built_config.endpoint == "https://agent.example.com"
    gateway.analyze.assert_called_once_with("hello")


def test_analyze_live_without_configuration(engine):
    with pytest.raises(ConfigurationError):
        engine.analyze("hello", "live")


def test_unknown_mode(engine):
    with pytest.raises(ValueError):
        engine.analyze("hello", "offline")


def test_library_missing_rule_targets():
    with pytest.raises(DataError):
        TriageEngine(ScenarioLibrary([]))


def test_simulated_delay_window(library):
    engine = TriageEngine(library, delay_window=(1.5, 2.5))
    for _ in range(20):
        assert 1.5 <= engine.simulated_delay() <= 2.5

    assert TriageEngine(library, delay_window=(0.0, 0.0)).simulated_delay() == 0.0


def test_default_delay_window(library):
    assert TriageEngine(library).delay_window == (1.5, 2.5)


@pytest.mark.asyncio
async def test_analyze_async_simulated(engine, library):
    response = await engine.analyze_async(library.example_input("construction-project-bid"))
    assert response.intent == "Construction Bid Request"


@pytest.mark.asyncio
async def test_analyze_async_waits_for_delay(library):
    engine = TriageEngine(library, delay_window=(1.5, 2.5))
    with patch("src.email_triage.processor.asyncio.sleep") as mock_sleep, \
            patch.object(engine, "simulated_delay", return_value=1.75):
        await engine.analyze_async("hello")
    mock_sleep.assert_awaited_once_with(1.75)


@pytest.mark.asyncio
async def test_analyze_async_live_errors_propagate(engine):
    with pytest.raises(ConfigurationError):
        await engine.analyze_async("hello", AgentMode.LIVE, AgentClientConfig())


def test_render_template_via_engine(engine, library):
    response = engine.classify(library.example_input("support-billing"))
    crm = engine.render_template(response, None, "crm")

    assert "CONTACT: sarah.chen@brightpath.io\n" in crm
    assert "ENGAGEMENT SCORE: 6/10\n" in crm
    assert "DEAL IMPACT: Moderate Risk – Active Engagement Needed\n" in crm
    assert "DATE: 2024-03-15 09:30:00\n" in crm
