"""
Triage Engine

Coordinates format detection, attribute extraction, scenario matching,
fallback analysis, the live gateway and response rendering. The engine is
an explicit object built by the caller; it keeps no per-call state, so one
instance can serve concurrent requests.
"""

import asyncio
import logging
import os
import random
import time
from datetime import datetime
from typing import Callable, Optional, Tuple, Union

from src.config.engine_config import ENGINE_CONFIG
from src.email_triage.analyzers.attributes import AttributeExtractor
from src.email_triage.analyzers.fallback import FallbackExtractor
from src.email_triage.analyzers.live_gateway import LiveGateway
from src.email_triage.classification.classifier import ScenarioMatcher
from src.email_triage.classification.format_detector import is_email_input
from src.email_triage.handlers.scenario_library import ScenarioLibrary
from src.email_triage.handlers.templates import ResponseTemplateGenerator
from src.email_triage.models import (
    AgentClientConfig,
    AgentMode,
    AgentResponse,
    EmailAnalysis,
    TemplateType,
)

logger = logging.getLogger(__name__)

GatewayFactory = Callable[[AgentClientConfig], LiveGateway]


def default_gateway_factory(config: AgentClientConfig) -> LiveGateway:
    return LiveGateway(config.endpoint, config.api_key)


class TriageEngine:
    """
    Email triage engine with simulated and live modes.

    Simulated mode runs the local cascade:
    1. Format detection
    2. Attribute extraction for email-shaped input
    3. Email scenario rules, then general scenario rules
    4. Generic fallback when no rule fires

    Live mode forwards the input to the configured endpoint instead.
    """

    def __init__(self,
                 library: ScenarioLibrary,
                 extractor: Optional[AttributeExtractor] = None,
                 fallback: Optional[FallbackExtractor] = None,
                 templates: Optional[ResponseTemplateGenerator] = None,
                 gateway_factory: GatewayFactory = default_gateway_factory,
                 delay_window: Optional[Tuple[float, float]] = None):
        """
        Initialize the engine with its collaborators.

        Args:
            library: Validated scenario library
            extractor: Email attribute extractor
            fallback: Generic fallback extractor
            templates: Response template generator
            gateway_factory: Builds a LiveGateway from a client config
            delay_window: (min, max) simulated latency in seconds; (0, 0) disables it

        Raises:
            DataError: If the library lacks a scenario referenced by the rules
        """
        self.library = library
        self.matcher = ScenarioMatcher(library)
        self.extractor = extractor or AttributeExtractor()
        self.fallback = fallback or FallbackExtractor()
        self.templates = templates or ResponseTemplateGenerator()
        self.gateway_factory = gateway_factory

        if delay_window is None:
            delay_window = (ENGINE_CONFIG["simulated"]["delay_min"],
                            ENGINE_CONFIG["simulated"]["delay_max"])
        self.delay_window = delay_window
        logger.info(f"TriageEngine initialized with {len(library)} scenarios")

    @classmethod
    def from_config(cls, library_path: Optional[str] = None, **kwargs) -> "TriageEngine":
        """Build an engine around the scenario library on disk."""
        return cls(ScenarioLibrary.load(library_path), **kwargs)

    def analyze_email(self, text: str) -> EmailAnalysis:
        return self.extractor.analyze(text)

    def classify(self, text: str) -> AgentResponse:
        """
        Run the simulated classification cascade.

        Pure apart from the fallback timestamp; never raises on any input.

        Args:
            text: Raw input text

        Returns:
            Scenario response or generic fallback response
        """
        text = text or ""
        request_id = f"classify-{datetime.now().strftime('%Y%m%d%H%M%S')}-{os.urandom(3).hex()}"
        start_time = time.time()
        logger.info(f"[{request_id}] Classifying input of length {len(text)}")

        email_analysis = self.analyze_email(text) if is_email_input(text) else None
        response = self.matcher.find_response(text, email_analysis)
        if response is None:
            response = self.fallback.analyze(text)

        logger.info(f"[{request_id}] Classification completed in {time.time() - start_time:.3f}s - "
                    f"intent: {response.intent}, routing: {response.routing}")
        return response

    def analyze(self,
                text: str,
                mode: Union[AgentMode, str] = AgentMode.SIMULATED,
                config: Optional[AgentClientConfig] = None) -> AgentResponse:
        """
        Analyze text in the requested mode.

        Args:
            text: Raw input text
            mode: simulated or live
            config: Endpoint settings, required for live mode

        Returns:
            AgentResponse for the input

        Raises:
            ConfigurationError: Live mode without endpoint or API key
            UpstreamError: Live endpoint returned an error status or bad payload
            NetworkError: Live endpoint unreachable
        """
        mode = AgentMode(mode)
        if mode is AgentMode.SIMULATED:
            return self.classify(text)

        config = (config or AgentClientConfig()).updated(mode=mode)
        gateway = self.gateway_factory(config)
        return gateway.analyze(text)

    def simulated_delay(self) -> float:
        low, high = self.delay_window
        if high <= 0:
            return 0.0
        return random.uniform(low, high)

    async def analyze_async(self,
                            text: str,
                            mode: Union[AgentMode, str] = AgentMode.SIMULATED,
                            config: Optional[AgentClientConfig] = None) -> AgentResponse:
        """
        Asynchronous analyze for interactive callers.

        Simulated mode waits for an artificial delay to imitate network
        latency before classifying. Live mode runs the blocking gateway call
        in a worker thread.
        """
        mode = AgentMode(mode)
        if mode is AgentMode.SIMULATED:
            delay = self.simulated_delay()
            if delay:
                await asyncio.sleep(delay)
            return self.classify(text)

        return await asyncio.to_thread(self.analyze, text, mode, config)

    def render_template(self,
                        response: AgentResponse,
                        email_analysis: Optional[EmailAnalysis],
                        template_type: Union[TemplateType, str],
                        now: Optional[datetime] = None) -> str:
        """Render one of the customer, manager, team or crm drafts."""
        return self.templates.render(response, template_type, email_analysis=email_analysis, now=now)
