"""
LiveGateway: External Agent Endpoint Client

Forwards raw input to an external analysis endpoint and returns its JSON
answer as an AgentResponse. The gateway makes exactly one request per call
and never retries; failures are reported to the caller immediately.

Design Considerations:
- Configuration checked before any network activity
- Non-success statuses surfaced with status code and reason
- Transport failures logged in full but reported with a generic message
"""

import logging
import os
import time
from datetime import datetime, timezone
from typing import Optional

import requests
from pydantic import ValidationError

from src.config.engine_config import ENGINE_CONFIG
from src.email_triage.errors import ConfigurationError, NetworkError, UpstreamError
from src.email_triage.models import AgentResponse

logger = logging.getLogger(__name__)


class LiveGateway:
    """
    Client for the live agent endpoint.

    The payload returned by the endpoint is validated against the
    AgentResponse shape but otherwise passed through untouched, including
    any fields this package does not know about.
    """

    def __init__(self, endpoint: Optional[str], api_key: Optional[str], timeout: Optional[float] = None):
        """
        Initialize the gateway.

        Args:
            endpoint: Full URL of the agent endpoint
            api_key: Bearer token sent with every request
            timeout: Request timeout in seconds

        Raises:
            ConfigurationError: If endpoint or API key is missing
        """
        if not endpoint or not api_key:
            raise ConfigurationError("Agent endpoint and API key are required for live mode")

        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout or ENGINE_CONFIG["live_gateway"]["timeout"]

    def analyze(self, text: str) -> AgentResponse:
        """
        Send text to the live endpoint and return its analysis.

        Args:
            text: Raw input text

        Returns:
            AgentResponse built from the endpoint's JSON body

        Raises:
            UpstreamError: On a non-2xx status or a body that is not an AgentResponse
            NetworkError: If the endpoint could not be reached
        """
        request_id = f"live-{datetime.now().strftime('%Y%m%d%H%M%S')}-{os.urandom(3).hex()}"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        payload = {
            "input": text,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        logger.info(f"[{request_id}] Sending input of length {len(text)} to live agent")
        start_time = time.time()
        try:
            response = requests.post(
                self.endpoint,
                headers=headers,
                json=payload,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"[{request_id}] Error calling live agent at {self.endpoint}: {e}")
            raise NetworkError() from e

        logger.debug(f"[{request_id}] Live agent responded with status {response.status_code} "
                     f"in {time.time() - start_time:.3f}s")

        if not response.ok:
            logger.error(f"[{request_id}] Live agent returned {response.status_code} {response.reason}")
            raise UpstreamError(response.status_code, response.reason or "")

        try:
            return AgentResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"[{request_id}] Live agent returned an invalid payload: {e}")
            raise UpstreamError(
                response.status_code,
                response.reason or "",
                message="Agent API returned a response that is not a valid analysis"
            ) from e
