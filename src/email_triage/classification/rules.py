"""
Scenario matching rule tables.

Each rule maps groups of keywords to a scenario id. A rule fires when any
keyword of any of its groups occurs in the lower-cased input. Tables are
evaluated top to bottom and the first rule that fires wins, so narrower
rules (client names, account ids) come before broader industry terms.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple


@dataclass(frozen=True)
class MatchRule:
    """
    One entry of a rule table.

    Attributes:
        rule_id: Stable identifier used in logs and tests
        keyword_groups: Groups of lower-case keywords, any of which fires the rule
        scenario_id: Scenario returned when the rule fires
    """
    rule_id: str
    keyword_groups: Tuple[Tuple[str, ...], ...]
    scenario_id: str

    def keywords(self) -> Iterator[str]:
        for group in self.keyword_groups:
            yield from group

    def first_hit(self, normalized_text: str) -> Optional[str]:
        """Return the first keyword found in already lower-cased text, if any."""
        for keyword in self.keywords():
            if keyword in normalized_text:
                return keyword
        return None


# Tried first for email-shaped input; a hit here attaches the fresh email analysis.
EMAIL_RULES: Tuple[MatchRule, ...] = (
    MatchRule(
        rule_id="email-billing",
        keyword_groups=(("billing", "invoice", "charged"),),
        scenario_id="support-billing",
    ),
    MatchRule(
        rule_id="email-technical",
        keyword_groups=(("technical", "api", "error", "403"),),
        scenario_id="technical-support",
    ),
    MatchRule(
        rule_id="email-feature-request",
        keyword_groups=(("feature request", "export", "functionality"),),
        scenario_id="feature-request",
    ),
    MatchRule(
        rule_id="email-account",
        keyword_groups=(("account", "settings", "notification"),),
        scenario_id="account-question",
    ),
)

GENERAL_RULES: Tuple[MatchRule, ...] = (
    MatchRule(
        rule_id="manufacturing-fabrication",
        keyword_groups=(
            ("penn stainless",),
            ("stainless steel", "fabrication", "tanks", "asme"),
            ("316l", "pressure vessel", "welding"),
        ),
        scenario_id="manufacturing-custom-fabrication",
    ),
    MatchRule(
        rule_id="construction-bid",
        keyword_groups=(
            ("tiny's construction",),
            ("construction", "bidding", "retail addition"),
            ("concrete foundation", "steel frame", "shopping center"),
        ),
        scenario_id="construction-project-bid",
    ),
    MatchRule(
        rule_id="energy-renewable",
        keyword_groups=(
            ("novitium energy",),
            ("250 mw", "solar farm", "battery energy storage"),
            ("photovoltaic", "grid interconnection", "138kv"),
        ),
        scenario_id="energy-renewable-project",
    ),
    MatchRule(
        rule_id="legal-compliance",
        keyword_groups=(
            ("globaltech",),
            ("eu ai act", "compliance", "chatbot"),
            ("ce marking", "dpia", "conformity assessment"),
        ),
        scenario_id="legal-compliance-inquiry",
    ),
    MatchRule(
        rule_id="emergency-service",
        keyword_groups=(
            ("metro transit",),
            ("urgent", "water main break", "flooded"),
            ("union station", "tunnel", "50,000 gallons"),
        ),
        scenario_id="emergency-service-request",
    ),
    MatchRule(
        rule_id="billing-support",
        keyword_groups=(
            ("acc-789456",),
            ("invoice", "charged $299", "basic plan"),
            ("downgraded", "refund", "account number"),
        ),
        scenario_id="support-billing",
    ),
    MatchRule(
        rule_id="technical-support",
        keyword_groups=(
            ("app-2024-x71",),
            ("api integration", "403 forbidden", "1,200+ users"),
            ("sync user data", "stopped working", "app id"),
        ),
        scenario_id="technical-support",
    ),
    MatchRule(
        rule_id="enterprise-rfp",
        keyword_groups=(
            ("500-employee", "comprehensive software"),
            ("project management", "crm", "enterprise security"),
            ("annual licensing", "api integrations"),
        ),
        scenario_id="rfp-enterprise",
    ),
)


def referenced_scenarios() -> Tuple[str, ...]:
    """All scenario ids any rule can select, in first-reference order."""
    seen = []
    for rule in EMAIL_RULES + GENERAL_RULES:
        if rule.scenario_id not in seen:
            seen.append(rule.scenario_id)
    return tuple(seen)
