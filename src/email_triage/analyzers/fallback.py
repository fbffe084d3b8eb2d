"""
Generic fallback analysis.

Produces a best-effort AgentResponse when no scenario rule fires. The
result depends only on the input text, apart from the processing
timestamp recorded in the metadata.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from src.config.engine_config import ENGINE_CONFIG
from src.email_triage.classification.format_detector import EMAIL_ADDRESS
from src.email_triage.models import AgentResponse

logger = logging.getLogger(__name__)

VALUE_PATTERN = re.compile(r"\$[\d,]+|\d+\s*(?:units|pieces|items|employees|users)", re.IGNORECASE)

INTENT_PATTERNS: List[Tuple[str, List[str]]] = [
    ("Pricing Inquiry", ["quote", "pricing", "cost"]),
    ("Support Request", ["support", "help", "issue"]),
    ("Information Request", ["information", "details", "specifications"]),
    ("Purchase Intent", ["order", "purchase", "buy"]),
    ("Consultation Request", ["meeting", "consultation", "discuss"]),
]

GENERAL_KB_MATCH = {
    "title": "General FAQ",
    "confidence": 0.65,
    "relevance": "Medium",
    "section": "Common Questions",
    "row_start": 1,
    "row_end": 15,
    "match_reason": "No specific knowledge base matches found for this input type",
}

GENERAL_KNOWLEDGE_GAPS = [
    {
        "description": "Input content requires manual review for proper classification",
        "confidence": 0.88,
        "gap_reason": "Content doesn't match any known scenario patterns",
    },
    {
        "description": "No specific routing rules defined for this type of inquiry",
        "confidence": 0.72,
        "gap_reason": "Routing logic needs expansion for this content type",
    },
]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FallbackExtractor:
    """Builds the generic response used when no scenario matches."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now):
        self.config = ENGINE_CONFIG["fallback"]
        self.clock = clock

    def detect_intent(self, text: str) -> str:
        normalized = (text or "").lower()
        for intent, keywords in INTENT_PATTERNS:
            if any(keyword in normalized for keyword in keywords):
                return intent
        return "General Inquiry"

    def extract_items(self, text: str) -> List[Dict]:
        """
        Pull a contact address and up to three values out of the text.

        Values are currency amounts or counts of units, pieces, items,
        employees or users, in order of appearance.

        Args:
            text: Raw input text

        Returns:
            List of item dictionaries
        """
        items = []

        address_match = EMAIL_ADDRESS.search(text)
        if address_match:
            address = address_match.group(0)
            items.append({
                "sku": "EMAIL-CONTACT",
                "description": address,
                "quantity": 1,
                "category": "Contact Information",
                "confidence": self.config["contact_confidence"],
                "extraction_source": f"Email address found: {address}",
            })

        values = [m.group(0) for m in VALUE_PATTERN.finditer(text)]
        for index, value in enumerate(values[:self.config["max_value_items"]], start=1):
            items.append({
                "sku": f"ITEM-{index}",
                "description": value,
                "quantity": 1,
                "category": "Extracted Value",
                "confidence": self.config["value_confidence"],
                "extraction_source": f"Numerical value detected: {value}",
            })

        return items

    def analyze(self, text: Optional[str], processed_at: Optional[datetime] = None) -> AgentResponse:
        """
        Build the generic response for unmatched input.

        Args:
            text: Raw input text
            processed_at: Timestamp to record; the injected clock is used when None

        Returns:
            Well-formed AgentResponse
        """
        text = text or ""
        processed_at = processed_at or self.clock()
        intent = self.detect_intent(text)
        logger.info(f"Using generic fallback analysis, detected intent: {intent}")

        return AgentResponse(
            intent=intent,
            intent_confidence=self.config["intent_confidence"],
            routing=self.config["routing"],
            routing_confidence=self.config["routing_confidence"],
            confidence=self.config["confidence"],
            items=self.extract_items(text),
            kb_matches=[dict(GENERAL_KB_MATCH)],
            knowledge_gaps=[dict(gap) for gap in GENERAL_KNOWLEDGE_GAPS],
            extracted_metadata={
                "input_length": len(text),
                "detected_type": "general",
                "processing_time": processed_at.isoformat(),
                "word_count": len(text.split()),
            },
        )
