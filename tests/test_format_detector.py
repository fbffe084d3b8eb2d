"""Tests for email detection and the input type preview label."""

import pytest

from src.email_triage.classification.format_detector import (
    MIN_PREVIEW_LENGTH,
    detect_input_type,
    is_email_input,
)


@pytest.mark.parametrize("text", [
    "From: someone\nhello",
    "subject: Pricing\n\nbody",
    "Hello,\nFROM: Ops Team\nplease call",
    "Reach me at jane.doe@example.org for details",
])
def test_email_shaped_input(text):
    assert is_email_input(text) is True


@pytest.mark.parametrize("text", [
    "",
    None,
    "We need a quote for 200 units",
    "Sent from: my phone",  # header must start a line
    "contact me at jane@localhost",
])
def test_non_email_input(text):
    assert is_email_input(text) is False


def test_short_input_has_no_label():
    assert detect_input_type("x" * (MIN_PREVIEW_LENGTH - 1)) is None
    assert detect_input_type("") is None
    assert detect_input_type(None) is None


def test_unmatched_input_is_general_inquiry():
    assert detect_input_type("Could you tell me your opening hours?") == "General Inquiry"


@pytest.mark.parametrize("text,label", [
    ("Penn Stainless needs a tank", "Manufacturing RFP"),
    ("Bid for a concrete parking deck", "Construction Bid"),
    ("Rooftop SOLAR install for our warehouse", "Energy Project"),
    ("Question about the AI Act for chatbots", "Legal Compliance"),
    ("Our basement is flooded, please send help", "Emergency Service"),
    ("Attached is our RFP for review", "Enterprise RFP"),
    ("Wrong amount on the invoice", "Support Request"),
    ("Getting 403 Forbidden from the endpoint", "Technical Support"),
])
def test_preview_labels(text, label):
    assert detect_input_type(text) == label


def test_label_order_breaks_ties():
    # Both "manufacturing" and "energy" appear; manufacturing is listed first
    assert detect_input_type("Manufacturing line for energy storage") == "Manufacturing RFP"
