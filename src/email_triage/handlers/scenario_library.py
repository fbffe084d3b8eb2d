"""
Scenario library loading.

Reads the static scenario library shipped with the package and validates
every entry up front. Any problem is fatal for simulated mode and surfaces
as a DataError at load time rather than during matching.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from pydantic import ValidationError

from src.config.engine_config import ENGINE_CONFIG
from src.email_triage.errors import DataError
from src.email_triage.models import AgentResponse, Scenario

logger = logging.getLogger(__name__)


class ScenarioLibrary:
    """Immutable, ordered collection of scenarios keyed by id."""

    def __init__(self, scenarios: List[Scenario]):
        self._scenarios: Dict[str, Scenario] = {}
        for scenario in scenarios:
            if scenario.id in self._scenarios:
                raise DataError(f"Duplicate scenario id: {scenario.id}")
            self._scenarios[scenario.id] = scenario

    @classmethod
    def from_dict(cls, document: Dict) -> "ScenarioLibrary":
        """
        Build a library from a parsed JSON document.

        Args:
            document: Mapping with a "scenarios" list of {id, input, response}

        Returns:
            Validated ScenarioLibrary

        Raises:
            DataError: If the document or any entry is malformed
        """
        if not isinstance(document, dict) or not isinstance(document.get("scenarios"), list):
            raise DataError("Scenario library must contain a 'scenarios' list")

        scenarios = []
        for index, entry in enumerate(document["scenarios"]):
            try:
                scenarios.append(Scenario.model_validate(entry))
            except ValidationError as e:
                entry_id = entry.get("id") if isinstance(entry, dict) else None
                raise DataError(
                    f"Invalid scenario at position {index} (id={entry_id!r}): {e}"
                ) from e
        return cls(scenarios)

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "ScenarioLibrary":
        """
        Load and validate the scenario library from disk.

        Args:
            path: JSON file to read; defaults to the packaged library

        Returns:
            Validated ScenarioLibrary

        Raises:
            DataError: If the file is missing, unreadable or malformed
        """
        path = Path(path or ENGINE_CONFIG["scenario_library"]["path"])
        try:
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except FileNotFoundError as e:
            raise DataError(f"Scenario library not found: {path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise DataError(f"Scenario library could not be read from {path}: {e}") from e

        library = cls.from_dict(document)
        logger.info(f"Loaded {len(library)} scenarios from {path}")
        return library

    def __len__(self) -> int:
        return len(self._scenarios)

    def __iter__(self) -> Iterator[Scenario]:
        return iter(self._scenarios.values())

    def __contains__(self, scenario_id: str) -> bool:
        return scenario_id in self._scenarios

    def ids(self) -> List[str]:
        return list(self._scenarios)

    def get(self, scenario_id: str) -> Scenario:
        """
        Look up a scenario by id.

        Raises:
            KeyError: If no scenario has this id
        """
        return self._scenarios[scenario_id]

    def example_input(self, scenario_id: str) -> Optional[str]:
        """Return the example text of a scenario, or None for unknown ids."""
        scenario = self._scenarios.get(scenario_id)
        return scenario.input if scenario else None

    def response_for(self, scenario_id: str) -> AgentResponse:
        """Return a fresh copy of the scenario's stored response."""
        return self.get(scenario_id).response.model_copy(deep=True)
