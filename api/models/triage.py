"""
Triage Data Models

Defines request and response models for the triage endpoints. Analysis
results reuse the engine's AgentResponse model directly.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from src.email_triage.models import AgentMode, AgentResponse, EmailAnalysis, TemplateType


class AnalyzeRequest(BaseModel):
    """
    Request model for content analysis.

    Mode and endpoint settings are optional; server defaults apply
    when they are omitted.
    """
    input: str = Field(
        ...,
        description="Raw email or free text to analyze"
    )
    mode: Optional[AgentMode] = Field(
        default=None,
        description="simulated or live; server default when omitted"
    )
    endpoint: Optional[str] = Field(
        default=None,
        description="Live endpoint overriding the configured one; requires api_key"
    )
    api_key: Optional[str] = Field(
        default=None,
        description="Live API key overriding the configured one"
    )

    @field_validator("input")
    @classmethod
    def input_not_blank(cls, value: str) -> str:
        """Reject whitespace-only input."""
        if not value.strip():
            raise ValueError("input must not be blank")
        return value


class TemplateRequest(BaseModel):
    """Request model for rendering a response draft."""
    response: AgentResponse = Field(
        ...,
        description="Analysis result to render"
    )
    email_analysis: Optional[EmailAnalysis] = Field(
        default=None,
        description="Email analysis overriding response.email_analysis"
    )


class TemplateResponse(BaseModel):
    """Rendered response draft."""
    template_type: TemplateType
    content: str
    generated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Render timestamp"
    )


class DetectRequest(BaseModel):
    """Request model for input format detection."""
    input: str = Field(
        ...,
        description="Raw text being entered"
    )


class DetectResponse(BaseModel):
    """Result of input format detection."""
    is_email: bool = Field(
        ...,
        description="Whether the text looks like an email"
    )
    input_type: Optional[str] = Field(
        default=None,
        description="Preview label for the input, absent for very short text"
    )


class ScenarioSummary(BaseModel):
    """Scenario listing entry."""
    id: str
    intent: str
    routing: str


class ScenarioListResponse(BaseModel):
    """List of available example scenarios."""
    scenarios: List[ScenarioSummary] = Field(default_factory=list)
    total: int = Field(..., ge=0)


class ScenarioExampleResponse(BaseModel):
    """Example input of one scenario."""
    id: str
    input: str
