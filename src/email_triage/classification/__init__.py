"""
Format detection and scenario rule matching.
"""

from .format_detector import detect_input_type, is_email_input
from .rules import EMAIL_RULES, GENERAL_RULES, MatchRule
from .classifier import MatchResult, ScenarioMatcher

__all__ = [
    'detect_input_type',
    'is_email_input',
    'EMAIL_RULES',
    'GENERAL_RULES',
    'MatchRule',
    'MatchResult',
    'ScenarioMatcher'
]
