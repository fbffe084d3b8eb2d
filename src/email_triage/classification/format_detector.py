"""
Input format detection.

Decides whether raw text looks like an email and derives the short type
label shown next to the input while it is being typed.
"""

import re
from typing import List, Optional, Tuple

FROM_HEADER = re.compile(r"^from:", re.IGNORECASE | re.MULTILINE)
SUBJECT_HEADER = re.compile(r"^subject:", re.IGNORECASE | re.MULTILINE)
EMAIL_ADDRESS = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

# Preview labels, checked in order
INPUT_TYPE_PATTERNS: List[Tuple[str, List[str]]] = [
    ("Manufacturing RFP", ["stainless steel", "fabrication", "manufacturing", "penn stainless"]),
    ("Construction Bid", ["construction", "building", "concrete", "tiny's construction"]),
    ("Energy Project", ["solar", "energy", "renewable", "novitium energy"]),
    ("Legal Compliance", ["compliance", "legal", "ai act", "globaltech"]),
    ("Emergency Service", ["emergency", "urgent", "metro transit", "flooded"]),
    ("Enterprise RFP", ["rfp", "proposal", "enterprise", "500-employee"]),
    ("Support Request", ["invoice", "billing", "charged", "acc-789456"]),
    ("Technical Support", ["api", "integration", "403 forbidden", "app-2024-x71"]),
]

MIN_PREVIEW_LENGTH = 10


def is_email_input(text: Optional[str]) -> bool:
    """Return True when the text has a From:/Subject: header line or an email address."""
    if not text:
        return False
    return bool(
        FROM_HEADER.search(text)
        or SUBJECT_HEADER.search(text)
        or EMAIL_ADDRESS.search(text)
    )


def detect_input_type(text: Optional[str]) -> Optional[str]:
    """
    Label the kind of content being entered.

    Args:
        text: Raw input text

    Returns:
        Preview label, "General Inquiry" when nothing matches, or None
        for input too short to judge
    """
    if not text or len(text) < MIN_PREVIEW_LENGTH:
        return None

    normalized = text.lower()
    for label, keywords in INPUT_TYPE_PATTERNS:
        if any(keyword in normalized for keyword in keywords):
            return label
    return "General Inquiry"
