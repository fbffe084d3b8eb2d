"""
ResponseTemplateGenerator: Response Draft Rendering

Renders an AgentResponse and its optional EmailAnalysis into one of four
plain-text drafts: a customer reply, a manager summary, a team update or
a CRM activity log entry.

Design Considerations:
- Deterministic output for a given response and timestamp
- Every field has a documented default, so rendering never fails on
  missing analysis data
- Derived CRM values (engagement score, deal-stage impact) exposed as
  plain functions for direct testing
"""

import logging
import math
import re
from datetime import datetime
from typing import Callable, Dict, List, Optional, Union

from src.email_triage.models import AgentResponse, EmailAnalysis, TemplateType

logger = logging.getLogger(__name__)

HEADER_RULE = "=" * 50
LOCAL_PART = re.compile(r"^([^@\s]+)")

DEFAULT_GREETING_NAME = "valued customer"
DEFAULT_CONTACT = "Customer Inquiry"
DEFAULT_URGENCY = "medium"
DEFAULT_SENTIMENT = "neutral"
DEFAULT_RECOMMENDED_ACTION = "Review and respond"
ELEVATED_URGENCIES = ("high", "critical")


def percent(value: Optional[float]) -> int:
    """Convert a confidence in [0,1] to a whole percentage, rounding halves up."""
    if value is None:
        return 0
    return int(math.floor(value * 100 + 0.5))


def engagement_score(sentiment: str, urgency: str) -> int:
    """
    Score contact engagement on a 1-10 scale.

    Starts at 5, adds 2 for positive sentiment, subtracts 1 for negative
    sentiment and adds 2 for high or critical urgency.
    """
    score = 5
    if sentiment == "positive":
        score += 2
    if sentiment == "negative":
        score -= 1
    if urgency in ELEVATED_URGENCIES:
        score += 2
    return max(1, min(10, score))


def deal_stage_impact(sentiment: str, urgency: str) -> str:
    """Label the effect of this email on the deal stage."""
    if urgency == "critical" and sentiment == "negative":
        return "High Risk – Immediate Attention Required"
    if urgency == "high":
        return "Moderate Risk – Active Engagement Needed"
    if sentiment == "positive":
        return "Positive – Upsell Opportunity"
    return "Neutral – Standard Follow-up"


def greeting_name(sender: Optional[str]) -> str:
    """Capitalized local part of the sender, or a neutral salutation."""
    match = LOCAL_PART.match(sender or "")
    if not match:
        return DEFAULT_GREETING_NAME
    name = match.group(1)
    return name[0].upper() + name[1:]


class ResponseTemplateGenerator:
    """
    Renders response drafts from analysis results.

    Each template is a method taking the response and the resolved email
    analysis (possibly None) and returning the finished text.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock
        self._renderers: Dict[TemplateType, Callable[..., str]] = {
            TemplateType.CUSTOMER: self.customer_reply,
            TemplateType.MANAGER: self.manager_summary,
            TemplateType.TEAM: self.team_update,
        }

    def render(self,
               response: AgentResponse,
               template_type: Union[TemplateType, str],
               email_analysis: Optional[EmailAnalysis] = None,
               now: Optional[datetime] = None) -> str:
        """
        Render one response draft.

        Args:
            response: Analysis result to render
            template_type: One of customer, manager, team, crm
            email_analysis: Analysis to use instead of response.email_analysis
            now: Timestamp for the CRM log; the generator clock is used when None

        Returns:
            Formatted text block

        Raises:
            ValueError: If template_type is not a known template
        """
        template_type = TemplateType(template_type)
        analysis = email_analysis or response.email_analysis
        logger.debug(f"Rendering {template_type.value} template "
                     f"(email analysis {'present' if analysis else 'absent'})")

        if template_type is TemplateType.CRM:
            return self.crm_log(response, analysis, now=now)
        return self._renderers[template_type](response, analysis)

    def _bullets(self, lines: List[str], marker: str = "-") -> str:
        return "".join(f"{marker} {line}\n" for line in lines)

    def customer_reply(self, response: AgentResponse, analysis: Optional[EmailAnalysis]) -> str:
        urgency = analysis.urgency if analysis else DEFAULT_URGENCY
        subject = (analysis.subject if analysis else "") or response.intent or "Your Inquiry"
        sender = analysis.sender if analysis else ""
        elevated = urgency in ELEVATED_URGENCIES

        reply = f"Subject: Re: {subject}\n\n"
        reply += f"Dear {greeting_name(sender)},\n\n"
        reply += ("Thank you for reaching out urgently.\n\n" if elevated
                  else "Thank you for your email.\n\n")

        if analysis and analysis.key_points:
            reply += "I understand you're writing about:\n"
            reply += self._bullets(analysis.key_points) + "\n"

        if response.kb_matches:
            reply += "Based on our knowledge base, here's what I can share:\n"
            reply += self._bullets([f"{m.title}: {m.section}" for m in response.kb_matches[:2]]) + "\n"

        if analysis and analysis.required_actions:
            reply += "I'm working on the following for you:\n"
            reply += self._bullets(analysis.required_actions) + "\n"

        if elevated:
            reply += "Given the urgency, I'm prioritizing this and will have an update within 24 hours.\n\n"
        else:
            reply += "I'll review this carefully and respond within 2-3 business days.\n\n"

        reply += "Best regards,\n[Your Name]"
        return reply

    def manager_summary(self, response: AgentResponse, analysis: Optional[EmailAnalysis]) -> str:
        summary = f"EXECUTIVE SUMMARY\n{HEADER_RULE}\n\n"
        summary += f"Customer: {(analysis.sender if analysis else '') or DEFAULT_CONTACT}\n"
        summary += (f"Priority: {analysis.urgency if analysis else DEFAULT_URGENCY} | "
                    f"Sentiment: {analysis.sentiment if analysis else DEFAULT_SENTIMENT}\n")
        summary += f"Category: {(analysis.category if analysis else '') or response.intent or 'General'}\n\n"

        summary += "KEY ISSUES:\n"
        if analysis:
            for index, point in enumerate(analysis.key_points, start=1):
                summary += f"{index}. {point}\n"
        summary += "\n"

        summary += "AI ANALYSIS:\n"
        summary += f"Intent: {response.intent} ({percent(response.effective_intent_confidence)}% confidence)\n"
        summary += f"Routing: {response.routing}\n\n"

        if response.kb_matches:
            summary += "KNOWLEDGE BASE MATCHES:\n"
            summary += self._bullets([
                f"{m.title} ({percent(m.confidence)}% match)" for m in response.kb_matches[:3]
            ]) + "\n"

        if response.knowledge_gaps:
            summary += "KNOWLEDGE GAPS:\n"
            summary += self._bullets([gap.description for gap in response.knowledge_gaps[:2]]) + "\n"

        action = analysis.required_actions[0] if analysis and analysis.required_actions else DEFAULT_RECOMMENDED_ACTION
        summary += f"RECOMMENDED ACTION: {action}\n"
        return summary

    def team_update(self, response: AgentResponse, analysis: Optional[EmailAnalysis]) -> str:
        urgency = analysis.urgency if analysis else DEFAULT_URGENCY
        category = (analysis.category if analysis else "") or response.intent or "Customer"

        update = f"[{urgency.upper()} PRIORITY] New {category} Email\n\n"
        update += f"FROM: {(analysis.sender if analysis else '') or DEFAULT_CONTACT}\n"
        update += f"SUBJECT: {(analysis.subject if analysis else '') or response.intent or 'No subject'}\n"
        update += (f"SENTIMENT: {analysis.sentiment if analysis else DEFAULT_SENTIMENT} | "
                   f"URGENCY: {urgency}\n\n")

        if analysis and analysis.key_points:
            update += "KEY POINTS:\n" + self._bullets(analysis.key_points, "•") + "\n"

        if analysis and analysis.required_actions:
            update += "REQUIRED ACTIONS:\n" + self._bullets(analysis.required_actions, "•") + "\n"

        update += f"ROUTING: {response.routing}\n"
        update += f"CONFIDENCE: {percent(response.confidence)}%\n\n"

        if response.kb_matches:
            update += "RELEVANT KB ARTICLES:\n"
            update += self._bullets([m.title for m in response.kb_matches[:2]])

        return update

    def crm_log(self,
                response: AgentResponse,
                analysis: Optional[EmailAnalysis],
                now: Optional[datetime] = None) -> str:
        sentiment = analysis.sentiment if analysis else DEFAULT_SENTIMENT
        urgency = analysis.urgency if analysis else DEFAULT_URGENCY
        category = (analysis.category if analysis else "") or response.intent or "General Inquiry"
        logged_at = now or self.clock()

        crm = f"CRM ACTIVITY LOG - Email Received\n{HEADER_RULE}\n\n"
        crm += f"CONTACT: {(analysis.sender if analysis else '') or DEFAULT_CONTACT}\n"
        crm += f"DATE: {logged_at.strftime('%Y-%m-%d %H:%M:%S')}\n"
        crm += f"SUBJECT: {(analysis.subject if analysis else '') or response.intent or 'No subject'}\n\n"

        crm += f"CATEGORY: {category}\n"
        crm += f"SENTIMENT: {sentiment}\n"
        crm += f"URGENCY: {urgency}\n"
        crm += f"ENGAGEMENT SCORE: {engagement_score(sentiment, urgency)}/10\n\n"

        crm += "SUMMARY:\n"
        if analysis:
            crm += self._bullets(analysis.key_points)
        crm += "\n"

        crm += "NEXT ACTIONS:\n"
        if analysis:
            crm += self._bullets(analysis.required_actions)
        crm += "\n"

        crm += f"DEAL IMPACT: {deal_stage_impact(sentiment, urgency)}\n"
        category_tag = re.sub(r"\s+", "", category)
        crm += f"TAGS: #{category_tag} #{urgency}Priority\n\n"

        crm += f"AI ROUTING: {response.routing}\n"
        crm += f"CONFIDENCE: {percent(response.confidence)}%\n"
        return crm
