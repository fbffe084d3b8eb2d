"""
API Server Runner

Entry point for running the triage FastAPI server with environment
setup and logging configured before the application is imported.
"""

import argparse
import os
import sys
import traceback

import uvicorn
from dotenv import load_dotenv

from src.utils.logging_setup import configure_safe_logging

logger = configure_safe_logging("api_runner")


def parse_arguments():
    """Parse command line arguments for the API server."""
    parser = argparse.ArgumentParser(description="Run the Email Triage API server")

    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind the server to (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind the server to (default: 8000)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )
    parser.add_argument(
        "--env",
        type=str,
        choices=["development", "testing", "production"],
        default="development",
        help="Environment to run in (default: development)"
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["simulated", "live"],
        default=None,
        help="Default analysis mode (overrides AGENT_MODE)"
    )

    return parser.parse_args()


def setup_environment(env: str, mode: str = None) -> None:
    """
    Export environment settings read by APISettings.

    Args:
        env: Environment name (development, testing, production)
        mode: Default analysis mode, if given
    """
    os.environ["ENVIRONMENT"] = env
    os.environ["DEBUG"] = "true" if env in ("development", "testing") else "false"
    if mode:
        os.environ["AGENT_MODE"] = mode

    agent_mode = os.environ.get("AGENT_MODE", "simulated")
    logger.info(f"Default analysis mode: {agent_mode}")
    if agent_mode == "live" and not (os.environ.get("AGENT_ENDPOINT") and os.environ.get("AGENT_API_KEY")):
        logger.warning("Live mode selected but AGENT_ENDPOINT or AGENT_API_KEY is not set; "
                       "requests must supply them")


def main():
    """Run the API server."""
    load_dotenv()
    args = parse_arguments()
    setup_environment(args.env, args.mode)

    logger.info(f"Starting API server in {args.env} mode")
    logger.info(f"Server will be available at http://{args.host}:{args.port}")
    if args.env != "production":
        logger.info(f"API documentation will be available at http://{args.host}:{args.port}/docs")

    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info" if args.env == "production" else "debug"
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Error running server: {str(e)}")
        logger.error(traceback.format_exc())
        sys.exit(1)
