"""
Triage Service Implementation

Bridges the API layer and the triage engine: merges request overrides
with configured agent settings and exposes the engine operations to the
route handlers.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import Request

from api.config import APISettings
from api.models.triage import AnalyzeRequest, ScenarioSummary
from src.email_triage import AgentClientConfig, AgentResponse, EmailAnalysis, TemplateType, TriageEngine
from src.email_triage.classification.format_detector import detect_input_type, is_email_input

logger = logging.getLogger(__name__)


class TriageService:
    """Stateless facade over one TriageEngine instance."""

    def __init__(self, engine: TriageEngine, settings: APISettings):
        self.engine = engine
        self.settings = settings
        self.default_config = settings.agent_config()

    @classmethod
    def from_settings(cls, settings: APISettings) -> "TriageService":
        """Build the engine described by the settings."""
        delay_window = None if settings.SIMULATED_DELAY_ENABLED else (0.0, 0.0)
        engine = TriageEngine.from_config(settings.SCENARIO_LIBRARY_PATH, delay_window=delay_window)
        return cls(engine, settings)

    def client_config(self, request: AnalyzeRequest) -> AgentClientConfig:
        """
        Apply per-request overrides on top of the configured defaults.

        A request that names its own endpoint must also bring its own API
        key; the configured key is only ever sent to the configured endpoint.
        """
        overrides = {
            key: value for key, value in (
                ("mode", request.mode),
                ("endpoint", request.endpoint),
                ("api_key", request.api_key),
            ) if value is not None
        }
        if request.endpoint is not None:
            overrides["api_key"] = request.api_key
        return self.default_config.updated(**overrides) if overrides else self.default_config

    async def analyze(self, request: AnalyzeRequest) -> AgentResponse:
        """
        Analyze request input in the effective mode.

        Raises:
            TriageError: Propagated from the engine for the exception handlers
        """
        config = self.client_config(request)
        logger.info(f"Analyzing input of length {len(request.input)} in {config.mode.value} mode")
        return await self.engine.analyze_async(request.input, config.mode, config)

    def render(self,
               response: AgentResponse,
               email_analysis: Optional[EmailAnalysis],
               template_type: TemplateType,
               now: Optional[datetime] = None) -> str:
        return self.engine.render_template(response, email_analysis, template_type, now=now)

    def detect(self, text: str):
        return is_email_input(text), detect_input_type(text)

    def list_scenarios(self) -> List[ScenarioSummary]:
        return [
            ScenarioSummary(id=s.id, intent=s.response.intent, routing=s.response.routing)
            for s in self.engine.library
        ]

    def example_input(self, scenario_id: str) -> Optional[str]:
        return self.engine.library.example_input(scenario_id)


def get_triage_service(request: Request) -> TriageService:
    """Provide the application's triage service for dependency injection."""
    return request.app.state.triage_service
