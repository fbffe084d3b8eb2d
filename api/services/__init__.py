"""
API Services Package

Keeps engine orchestration out of the route handlers.
"""

from api.services.triage_service import TriageService, get_triage_service

__all__ = ["TriageService", "get_triage_service"]
