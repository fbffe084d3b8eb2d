"""
Email triage package initialization.
"""

from .models import (
    AgentClientConfig,
    AgentMode,
    AgentResponse,
    EmailAnalysis,
    KnowledgeGap,
    Scenario,
    TemplateType,
    normalize_knowledge_gaps,
)
from .errors import ConfigurationError, DataError, NetworkError, TriageError, UpstreamError
from .classification.classifier import ScenarioMatcher
from .analyzers.attributes import AttributeExtractor
from .analyzers.fallback import FallbackExtractor
from .analyzers.live_gateway import LiveGateway
from .handlers.scenario_library import ScenarioLibrary
from .handlers.templates import ResponseTemplateGenerator
from .processor import TriageEngine

__all__ = [
    'AgentClientConfig',
    'AgentMode',
    'AgentResponse',
    'EmailAnalysis',
    'KnowledgeGap',
    'Scenario',
    'TemplateType',
    'normalize_knowledge_gaps',
    'ConfigurationError',
    'DataError',
    'NetworkError',
    'TriageError',
    'UpstreamError',
    'ScenarioMatcher',
    'AttributeExtractor',
    'FallbackExtractor',
    'LiveGateway',
    'ScenarioLibrary',
    'ResponseTemplateGenerator',
    'TriageEngine'
]
