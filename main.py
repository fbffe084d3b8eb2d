"""
Command-line entry point for the email triage engine.

Reads an email or free-text request from a file or stdin, analyzes it and
prints either the analysis or one of the response drafts.

Examples:
    python main.py message.txt
    python main.py --scenario technical-support --template manager
    cat message.txt | python main.py --json
    python main.py message.txt --mode live --endpoint https://agent.example.com/analyze
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv

from src.email_triage import (
    AgentClientConfig,
    AgentMode,
    AgentResponse,
    TemplateType,
    TriageEngine,
    TriageError,
)
from src.utils.logging_setup import configure_safe_logging, resolve_level

logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Analyze an email or request and draft responses")

    parser.add_argument(
        "input_file",
        nargs="?",
        help="File containing the email or request (default: stdin)"
    )
    parser.add_argument(
        "--scenario",
        type=str,
        help="Analyze the example input of a library scenario instead of a file"
    )
    parser.add_argument(
        "--list-scenarios",
        action="store_true",
        help="List library scenarios and exit"
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=[mode.value for mode in AgentMode],
        default=None,
        help="Analysis mode (default: AGENT_MODE or simulated)"
    )
    parser.add_argument("--endpoint", type=str, default=None, help="Live agent endpoint URL")
    parser.add_argument("--api-key", type=str, default=None, help="Live agent API key")
    parser.add_argument(
        "--template",
        type=str,
        choices=[template.value for template in TemplateType],
        help="Print a response draft instead of the analysis"
    )
    parser.add_argument("--json", action="store_true", help="Print the analysis as JSON")
    parser.add_argument("--library", type=str, default=None, help="Scenario library JSON file")
    parser.add_argument("--no-delay", action="store_true", help="Skip the simulated latency")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: LOG_LEVEL or WARNING)")

    return parser.parse_args(argv)


def build_client_config(args) -> AgentClientConfig:
    """Command-line options take precedence over environment settings."""
    return AgentClientConfig(
        mode=args.mode or os.getenv("AGENT_MODE") or AgentMode.SIMULATED,
        endpoint=args.endpoint or os.getenv("AGENT_ENDPOINT") or None,
        api_key=args.api_key or os.getenv("AGENT_API_KEY") or None
    )


def read_input(args, engine: TriageEngine) -> Optional[str]:
    if args.scenario:
        return engine.library.example_input(args.scenario)
    if args.input_file:
        with open(args.input_file, "r", encoding="utf-8") as file:
            return file.read()
    return sys.stdin.read()


def format_analysis(response: AgentResponse) -> str:
    """Human-readable summary of an analysis."""
    lines = [
        f"Intent:  {response.intent} ({response.effective_intent_confidence:.0%})",
        f"Routing: {response.routing} ({response.effective_routing_confidence:.0%})",
    ]
    if response.email_analysis:
        analysis = response.email_analysis
        lines.append(f"Email:   {analysis.sentiment} sentiment, {analysis.urgency} urgency, {analysis.category}")
    if response.items:
        lines.append("Items:")
        lines.extend(f"  {item.sku} x{item.quantity}: {item.description}" for item in response.items)
    if response.kb_matches:
        lines.append("Knowledge base:")
        lines.extend(f"  {match.title} ({match.confidence:.0%})" for match in response.kb_matches)
    if response.knowledge_gaps:
        lines.append("Knowledge gaps:")
        lines.extend(f"  {gap.description}" for gap in response.knowledge_gaps)
    return "\n".join(lines)


async def run(args) -> int:
    delay_window = (0.0, 0.0) if args.no_delay else None
    engine = TriageEngine.from_config(args.library, delay_window=delay_window)

    if args.list_scenarios:
        for scenario in engine.library:
            print(f"{scenario.id:34} {scenario.response.intent}")
        return 0

    text = read_input(args, engine)
    if text is None:
        logger.error(f"Unknown scenario: {args.scenario}")
        return 2
    if not text.strip():
        logger.error("No input provided")
        return 2

    config = build_client_config(args)
    response = await engine.analyze_async(text, config.mode, config)

    if args.template:
        print(engine.render_template(response, response.email_analysis, args.template))
    elif args.json:
        print(json.dumps(response.model_dump(mode="json", exclude_none=True), indent=2, ensure_ascii=False))
    else:
        print(format_analysis(response))
    return 0


def main(argv=None) -> int:
    load_dotenv()
    args = parse_arguments(argv)
    configure_safe_logging(level=resolve_level(args.log_level or os.getenv("LOG_LEVEL"), logging.WARNING))

    try:
        return asyncio.run(run(args))
    except TriageError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
