"""
Tests for the scenario rule tables and ScenarioMatcher.

Every keyword of every rule is exercised on its own, so a reordering of
the tables or a new shadowing keyword shows up as a failure.
"""

import pytest

from src.email_triage.classification.classifier import MatchResult, ScenarioMatcher
from src.email_triage.classification.rules import (
    EMAIL_RULES,
    GENERAL_RULES,
    MatchRule,
    referenced_scenarios,
)
from src.email_triage.errors import DataError
from src.email_triage.handlers.scenario_library import ScenarioLibrary
from src.email_triage.models import EmailAnalysis

# Keywords that an earlier rule's keyword already covers
SHADOWED_KEYWORDS = {
    "api integrations": "technical-support",
}


def keyword_cases(rules):
    for rule in rules:
        for keyword in rule.keywords():
            yield pytest.param(rule, keyword, id=f"{rule.rule_id}:{keyword}")


@pytest.fixture
def matcher(library):
    return ScenarioMatcher(library)


def test_rule_tables_are_ordered_as_documented():
    assert [rule.rule_id for rule in EMAIL_RULES] == [
        "email-billing",
        "email-technical",
        "email-feature-request",
        "email-account",
    ]
    assert [rule.rule_id for rule in GENERAL_RULES] == [
        "manufacturing-fabrication",
        "construction-bid",
        "energy-renewable",
        "legal-compliance",
        "emergency-service",
        "billing-support",
        "technical-support",
        "enterprise-rfp",
    ]


def test_every_rule_target_exists(library):
    assert set(referenced_scenarios()) <= set(library.ids())


def test_rule_keywords_are_lower_case():
    for rule in EMAIL_RULES + GENERAL_RULES:
        for keyword in rule.keywords():
            assert keyword == keyword.lower()


@pytest.mark.parametrize("rule,keyword", keyword_cases(GENERAL_RULES))
def test_general_keyword_selects_its_rule(matcher, rule, keyword):
    result = matcher.match(f"Hello, regarding {keyword.upper()} for next month.", is_email=False)
    assert result is not None
    assert result.cascade == "general"
    assert result.scenario_id == SHADOWED_KEYWORDS.get(keyword, rule.scenario_id)


@pytest.mark.parametrize("rule,keyword", keyword_cases(EMAIL_RULES))
def test_email_keyword_selects_its_rule(matcher, rule, keyword):
    text = f"From: pat@corp.co\nSubject: Note\n\nHello, regarding {keyword}."
    result = matcher.match(text)
    assert result == MatchResult(rule.rule_id, rule.scenario_id, keyword, "email")


def test_example_inputs_select_their_own_scenario(matcher, library):
    for scenario in library:
        result = matcher.match(scenario.input)
        assert result is not None, scenario.id
        assert result.scenario_id == scenario.id


def test_earlier_general_rule_wins(matcher):
    result = matcher.match("Our construction crew needs stainless steel tanks")
    assert result.rule_id == "manufacturing-fabrication"

    result = matcher.match("Urgent: the invoice is wrong")
    assert result.rule_id == "emergency-service"


def test_email_cascade_runs_before_general(matcher):
    # "urgent" alone would select the emergency scenario in the general cascade
    result = matcher.match("From: a@corp.co\nSubject: Urgent invoice fix")
    assert result.rule_id == "email-billing"
    assert result.cascade == "email"


def test_email_without_email_rule_falls_through(matcher):
    result = matcher.match("From: ops@city.gov\nSubject: Flooded tunnel\n\nWater everywhere.")
    assert result.cascade == "general"
    assert result.scenario_id == "emergency-service-request"


def test_no_rule_fires(matcher):
    assert matcher.match("Please send me a price quote for your services") is None
    assert matcher.find_response("Please send me a price quote for your services") is None


def test_find_response_attaches_fresh_email_analysis(matcher, library):
    fresh = EmailAnalysis(sender="pat@corp.co", subject="Invoice", sentiment="positive")
    response = matcher.find_response("Subject: Invoice\n\nThanks for the invoice", fresh)

    assert response.intent == library.get("support-billing").response.intent
    assert response.email_analysis == fresh
    # stored library response is untouched
    assert library.get("support-billing").response.email_analysis.sender == "sarah.chen@brightpath.io"


def test_general_hit_keeps_stored_response(matcher, library):
    text = library.example_input("energy-renewable-project")
    assert matcher.find_response(text) == library.get("energy-renewable-project").response


def test_missing_rule_target_is_a_data_error(library):
    rules = (MatchRule("orphan", (("orphan",),), "does-not-exist"),)
    with pytest.raises(DataError, match="does-not-exist"):
        ScenarioMatcher(library, general_rules=GENERAL_RULES + rules)


def test_empty_library_is_a_data_error():
    with pytest.raises(DataError):
        ScenarioMatcher(ScenarioLibrary([]))
