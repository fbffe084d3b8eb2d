"""
Email attribute extraction.

Derives sender, subject, sentiment, urgency, category, key points and
required actions from raw email-like text using ordered keyword tables.
Every method is total: when an expected pattern is absent the documented
default is returned.
"""

import logging
import re
from typing import List, Optional, Tuple

from src.email_triage.classification.format_detector import EMAIL_ADDRESS
from src.email_triage.models import EmailAnalysis

logger = logging.getLogger(__name__)

FROM_LINE = re.compile(r"from:\s*(.+?)(?:\n|$)", re.IGNORECASE)
SUBJECT_LINE = re.compile(r"subject:\s*(.+?)(?:\n|$)", re.IGNORECASE)
SENTENCE_BREAK = re.compile(r"[.!?]+")

MIN_KEY_POINT_LENGTH = 11
MAX_KEY_POINTS = 3


class AttributeExtractor:
    """
    Keyword-driven extractor producing an EmailAnalysis.

    The keyword tables are evaluated in order and the first matching group
    wins, except for required actions where every matching group adds one
    action.
    """

    def __init__(self):
        self.sentiment_patterns: List[Tuple[str, List[str]]] = [
            ("urgent", ["urgent", "asap", "immediately", "critical", "emergency"]),
            ("negative", ["issue", "problem", "complaint", "disappointed",
                          "frustrated", "angry", "unhappy"]),
            ("positive", ["thank", "appreciate", "great", "excellent", "happy", "satisfied"]),
        ]

        self.urgency_patterns: List[Tuple[str, List[str]]] = [
            ("critical", ["urgent", "asap", "emergency"]),
            ("high", ["soon", "quickly", "important"]),
            ("low", ["when you can", "at your convenience"]),
        ]

        self.category_patterns: List[Tuple[str, List[str]]] = [
            ("Billing", ["billing", "invoice", "payment"]),
            ("Technical Support", ["technical", "bug", "error"]),
            ("Feature Request", ["feature", "request", "suggestion"]),
            ("Account Management", ["account", "password", "login"]),
        ]

        self.action_patterns: List[Tuple[str, List[str]]] = [
            ("Process refund request", ["refund"]),
            ("Handle cancellation", ["cancel"]),
            ("Update account details", ["change", "update"]),
            ("Provide customer support", ["help", "support"]),
            ("Answer customer questions", ["question"]),
        ]

        self.default_actions = ["Review customer inquiry", "Provide appropriate response"]

    def _normalize_text(self, text: Optional[str]) -> str:
        """Normalize text for pattern matching."""
        if text is None:
            return ""
        return text.lower()

    def _contains_pattern(self, text: str, patterns: List[str]) -> bool:
        """Check if text contains any of the patterns."""
        normalized_text = self._normalize_text(text)
        return any(pattern in normalized_text for pattern in patterns)

    def _first_match(self, text: str, table: List[Tuple[str, List[str]]], default: str) -> str:
        for label, patterns in table:
            if self._contains_pattern(text, patterns):
                return label
        return default

    def detect_sentiment(self, text: str) -> str:
        """Urgent markers win over negative ones, which win over positive ones."""
        return self._first_match(text, self.sentiment_patterns, "neutral")

    def detect_urgency(self, text: str) -> str:
        return self._first_match(text, self.urgency_patterns, "medium")

    def detect_category(self, text: str) -> str:
        return self._first_match(text, self.category_patterns, "General Inquiry")

    def extract_key_points(self, body: str) -> List[str]:
        """Return the first three sentences of the body long enough to be meaningful."""
        sentences = [s.strip() for s in SENTENCE_BREAK.split(body or "")]
        return [s for s in sentences if len(s) >= MIN_KEY_POINT_LENGTH][:MAX_KEY_POINTS]

    def extract_required_actions(self, body: str) -> List[str]:
        actions = [
            action for action, patterns in self.action_patterns
            if self._contains_pattern(body, patterns)
        ]
        return actions or list(self.default_actions)

    def extract_headers(self, text: str) -> Tuple[str, str, str]:
        """
        Split raw text into sender, subject and body.

        The body starts after the later of the From:/Subject: header lines.
        When neither header is present the whole text is the body.

        Args:
            text: Raw email-like text

        Returns:
            Tuple of (sender, subject, body)
        """
        sender = ""
        subject = ""
        body_start = 0

        sender_match = FROM_LINE.search(text)
        if sender_match:
            sender = sender_match.group(1).strip()
            body_start = max(body_start, sender_match.end())
        else:
            address_match = EMAIL_ADDRESS.search(text)
            if address_match:
                sender = address_match.group(0)

        subject_match = SUBJECT_LINE.search(text)
        if subject_match:
            subject = subject_match.group(1).strip()
            body_start = max(body_start, subject_match.end())

        return sender, subject, text[body_start:].strip()

    def analyze(self, text: Optional[str]) -> EmailAnalysis:
        """
        Build an EmailAnalysis for email-shaped text.

        Sentiment, urgency and category look at the whole text including
        headers; key points and actions look at the body only.

        Args:
            text: Raw email-like text

        Returns:
            EmailAnalysis with all fields populated
        """
        text = text or ""
        sender, subject, body = self.extract_headers(text)

        analysis = EmailAnalysis(
            sender=sender,
            subject=subject,
            sentiment=self.detect_sentiment(text),
            urgency=self.detect_urgency(text),
            category=self.detect_category(text),
            key_points=self.extract_key_points(body),
            required_actions=self.extract_required_actions(body),
        )
        logger.debug(
            f"Email attributes - sender: {analysis.sender!r}, sentiment: {analysis.sentiment}, "
            f"urgency: {analysis.urgency}, category: {analysis.category}"
        )
        return analysis
