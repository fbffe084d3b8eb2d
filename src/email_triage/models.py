"""
Shared data models for email triage.

All models are immutable pydantic models. Responses coming from the
scenario library or the live endpoint are validated here, which is also
where the legacy string form of knowledge gaps is normalized.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Sentiment = Literal["positive", "neutral", "negative", "urgent"]
Urgency = Literal["low", "medium", "high", "critical"]


class AgentMode(str, Enum):
    """Supported analysis modes."""
    SIMULATED = "simulated"
    LIVE = "live"


class TemplateType(str, Enum):
    """Response drafts the template generator can render."""
    CUSTOMER = "customer"
    MANAGER = "manager"
    TEAM = "team"
    CRM = "crm"


class EmailAnalysis(BaseModel):
    """Attributes extracted from an email-shaped input."""
    model_config = ConfigDict(frozen=True)

    sender: str = Field(default="", description="Sender header value or first address found")
    subject: str = Field(default="", description="Subject header value")
    sentiment: Sentiment = Field(default="neutral")
    urgency: Urgency = Field(default="medium")
    category: str = Field(default="General Inquiry")
    key_points: List[str] = Field(default_factory=list, max_length=3)
    required_actions: List[str] = Field(
        default_factory=lambda: ["Review customer inquiry", "Provide appropriate response"],
        min_length=1,
    )


class ExtractedItem(BaseModel):
    """A line item extracted from the input."""
    model_config = ConfigDict(frozen=True)

    sku: str
    description: str
    quantity: int = Field(default=1, ge=1)
    category: str
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    extraction_source: Optional[str] = None


class KnowledgeBaseMatch(BaseModel):
    """A knowledge-base section relevant to the input."""
    model_config = ConfigDict(frozen=True)

    title: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    relevance: str
    section: str
    row_start: Optional[int] = None
    row_end: Optional[int] = None
    match_reason: Optional[str] = None


class KnowledgeGap(BaseModel):
    """An area where the knowledge base lacks coverage for the input."""
    model_config = ConfigDict(frozen=True)

    description: str
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    gap_reason: Optional[str] = None


RawKnowledgeGap = Union[str, Dict[str, Any], KnowledgeGap]


def normalize_knowledge_gaps(raw: Optional[List[RawKnowledgeGap]]) -> List[Dict[str, Any]]:
    """
    Convert knowledge gaps to the object form.

    Older payloads carry knowledge gaps as plain strings; newer ones carry
    objects with a description, confidence and reason. Both are accepted
    and returned as a list of dictionaries ready for model validation.

    Args:
        raw: Knowledge gaps in either form, or None

    Returns:
        List of gap dictionaries

    Raises:
        ValueError: If the value is not a list, string or object, or an
            entry is neither a string nor an object
    """
    if raw is None:
        return []
    if isinstance(raw, (str, dict, KnowledgeGap)):
        raw = [raw]
    if not isinstance(raw, (list, tuple)):
        raise ValueError(f"Unsupported knowledge gaps value: {raw!r}")

    normalized = []
    for gap in raw:
        if isinstance(gap, KnowledgeGap):
            normalized.append(gap.model_dump())
        elif isinstance(gap, str):
            normalized.append({"description": gap})
        elif isinstance(gap, dict):
            normalized.append(gap)
        else:
            raise ValueError(f"Unsupported knowledge gap entry: {gap!r}")
    return normalized


class AgentResponse(BaseModel):
    """
    Structured output of one analysis.

    Unknown keys in a live payload are kept so the response can be handed
    back to the caller unmodified.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    intent: str
    intent_confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    routing: str
    routing_confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    confidence: float = Field(..., ge=0.0, le=1.0)
    email_analysis: Optional[EmailAnalysis] = None
    items: List[ExtractedItem] = Field(default_factory=list)
    kb_matches: List[KnowledgeBaseMatch] = Field(default_factory=list)
    knowledge_gaps: List[KnowledgeGap] = Field(default_factory=list)
    extracted_metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("items", "kb_matches", mode="before")
    @classmethod
    def _default_lists(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("knowledge_gaps", mode="before")
    @classmethod
    def _normalize_gaps(cls, value: Any) -> List[Dict[str, Any]]:
        return normalize_knowledge_gaps(value)

    @field_validator("extracted_metadata", mode="before")
    @classmethod
    def _default_metadata(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def effective_intent_confidence(self) -> float:
        """Intent confidence, falling back to the overall confidence."""
        if self.intent_confidence is None:
            return self.confidence
        return self.intent_confidence

    @property
    def effective_routing_confidence(self) -> float:
        """Routing confidence, falling back to the overall confidence."""
        if self.routing_confidence is None:
            return self.confidence
        return self.routing_confidence


class Scenario(BaseModel):
    """A canned example input paired with a pre-built response."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    input: str
    response: AgentResponse


class AgentClientConfig(BaseModel):
    """Mode and live endpoint settings for one analysis call."""
    model_config = ConfigDict(frozen=True)

    mode: AgentMode = AgentMode.SIMULATED
    endpoint: Optional[str] = None
    api_key: Optional[str] = None

    def updated(self, **changes: Any) -> "AgentClientConfig":
        """Return a copy with the given fields replaced."""
        return self.model_validate({**self.model_dump(), **changes})
