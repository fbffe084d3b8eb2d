# config/engine_config.py

from pathlib import Path

DATA_DIR = Path(__file__).resolve().parent.parent / "email_triage" / "data"

ENGINE_CONFIG = {
    "scenario_library": {
        "path": DATA_DIR / "scenarios.json",
    },
    "simulated": {
        # Artificial latency window in seconds, UI realism only
        "delay_min": 1.5,
        "delay_max": 2.5,
    },
    "live_gateway": {
        "timeout": 30,
    },
    "fallback": {
        "intent_confidence": 0.75,
        "routing": "Customer Support > General Team",
        "routing_confidence": 0.68,
        "confidence": 0.75,
        "contact_confidence": 0.95,
        "value_confidence": 0.7,
        "max_value_items": 3,
    },
}
