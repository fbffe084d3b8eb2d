"""
Email Triage API Routes

Implements endpoints for content analysis, response draft rendering,
input format detection and the example scenario catalogue.

Engine errors are not caught here; the registered exception handlers
translate them into the standard error envelope.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, status

from api.models.triage import (
    AnalyzeRequest,
    DetectRequest,
    DetectResponse,
    ScenarioExampleResponse,
    ScenarioListResponse,
    TemplateRequest,
    TemplateResponse,
)
from api.services.triage_service import TriageService, get_triage_service
from src.email_triage.models import AgentResponse, TemplateType

# Configure logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/triage", tags=["Email Triage"])


@router.post(
    "/analyze",
    response_model=AgentResponse,
    summary="Analyze email or free-text content"
)
async def analyze(
    request: AnalyzeRequest,
    triage_service: TriageService = Depends(get_triage_service)
):
    """
    Analyze content in simulated or live mode.

    Args:
        request: Input text with optional mode and endpoint overrides

    Returns:
        Structured analysis with intent, routing, items and knowledge-base matches
    """
    return await triage_service.analyze(request)


@router.post(
    "/templates/{template_type}",
    response_model=TemplateResponse,
    summary="Render a response draft"
)
async def render_template(
    body: TemplateRequest,
    template_type: TemplateType = Path(..., description="customer, manager, team or crm"),
    triage_service: TriageService = Depends(get_triage_service)
):
    """
    Render a customer reply, manager summary, team update or CRM log entry.

    Args:
        body: Analysis result and optional email analysis override
        template_type: Draft to render

    Returns:
        Rendered draft text
    """
    content = triage_service.render(body.response, body.email_analysis, template_type)
    return TemplateResponse(template_type=template_type, content=content)


@router.post(
    "/detect",
    response_model=DetectResponse,
    summary="Detect input format"
)
async def detect(
    request: DetectRequest,
    triage_service: TriageService = Depends(get_triage_service)
):
    """Report whether input looks like an email and its preview label."""
    is_email, input_type = triage_service.detect(request.input)
    return DetectResponse(is_email=is_email, input_type=input_type)


@router.get(
    "/scenarios",
    response_model=ScenarioListResponse,
    summary="List example scenarios"
)
async def list_scenarios(
    triage_service: TriageService = Depends(get_triage_service)
):
    """List the scenarios available in simulated mode."""
    scenarios = triage_service.list_scenarios()
    return ScenarioListResponse(scenarios=scenarios, total=len(scenarios))


@router.get(
    "/scenarios/{scenario_id}",
    response_model=ScenarioExampleResponse,
    summary="Get a scenario's example input"
)
async def get_scenario_example(
    scenario_id: str = Path(..., description="Scenario identifier"),
    triage_service: TriageService = Depends(get_triage_service)
):
    """
    Return the example input of a scenario.

    Raises:
        HTTPException: If the scenario does not exist
    """
    example = triage_service.example_input(scenario_id)
    if example is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Scenario {scenario_id} not found"
        )
    return ScenarioExampleResponse(id=scenario_id, input=example)
