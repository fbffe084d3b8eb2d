"""
API Package Initialization

Provides the FastAPI application exposing the triage engine over HTTP.
"""
