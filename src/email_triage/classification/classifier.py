import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from src.email_triage.classification.format_detector import is_email_input
from src.email_triage.classification.rules import EMAIL_RULES, GENERAL_RULES, MatchRule
from src.email_triage.errors import DataError
from src.email_triage.handlers.scenario_library import ScenarioLibrary
from src.email_triage.models import AgentResponse, EmailAnalysis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    """Which rule fired, on which keyword, and in which cascade."""
    rule_id: str
    scenario_id: str
    keyword: str
    cascade: str


class ScenarioMatcher:
    """
    Maps free text to a canned scenario response.

    Uses two ordered rule tables: a short email cascade tried first for
    email-shaped input, and the general cascade. First match wins.
    """

    def __init__(self,
                 library: ScenarioLibrary,
                 email_rules: Sequence[MatchRule] = EMAIL_RULES,
                 general_rules: Sequence[MatchRule] = GENERAL_RULES):
        """
        Initialize matcher and check every rule target exists.

        Raises:
            DataError: If a rule points at a scenario missing from the library
        """
        self.library = library
        self.email_rules = tuple(email_rules)
        self.general_rules = tuple(general_rules)

        missing = sorted({
            rule.scenario_id for rule in self.email_rules + self.general_rules
            if rule.scenario_id not in library
        })
        if missing:
            raise DataError(f"Scenario library is missing rule targets: {', '.join(missing)}")

    def _normalize_text(self, text: Optional[str]) -> str:
        if text is None:
            return ""
        return text.lower()

    def _first_rule(self, normalized_text: str, rules: Sequence[MatchRule], cascade: str) -> Optional[MatchResult]:
        for rule in rules:
            keyword = rule.first_hit(normalized_text)
            if keyword is not None:
                return MatchResult(rule.rule_id, rule.scenario_id, keyword, cascade)
        return None

    def match_email(self, text: str) -> Optional[MatchResult]:
        """Run only the email cascade."""
        return self._first_rule(self._normalize_text(text), self.email_rules, "email")

    def match_general(self, text: str) -> Optional[MatchResult]:
        """Run only the general cascade."""
        return self._first_rule(self._normalize_text(text), self.general_rules, "general")

    def match(self, text: str, is_email: Optional[bool] = None) -> Optional[MatchResult]:
        """
        Find the rule that selects a scenario for this text.

        Args:
            text: Raw input text
            is_email: Whether the input is email-shaped; detected when None

        Returns:
            MatchResult for the first rule that fired, or None
        """
        if is_email is None:
            is_email = is_email_input(text)

        result = self.match_email(text) if is_email else None
        return result or self.match_general(text)

    def find_response(self, text: str, email_analysis: Optional[EmailAnalysis] = None) -> Optional[AgentResponse]:
        """
        Return the scenario response selected for this text.

        When email_analysis is given the input is treated as email-shaped:
        a hit in the email cascade returns the scenario response with its
        email analysis replaced by the given one. General cascade hits
        return the stored response as is.

        Args:
            text: Raw input text
            email_analysis: Fresh analysis of an email-shaped input, if any

        Returns:
            Fresh AgentResponse, or None when no rule fires
        """
        result = self.match(text, is_email=email_analysis is not None)
        if result is None:
            logger.info("No scenario rule matched")
            return None

        logger.info(
            f"Matched scenario {result.scenario_id} via rule {result.rule_id} "
            f"({result.cascade} cascade, keyword {result.keyword!r})"
        )
        response = self.library.response_for(result.scenario_id)
        if result.cascade == "email":
            response = response.model_copy(update={"email_analysis": email_analysis})
        return response
