"""
API Routes Package

Centralizes route management with explicit router imports.
"""

from api.routes import triage

__all__ = ["triage"]
