"""
Advisor registry.

Read-only catalog of advisor definitions keyed by name. Lookups signal
"not found" by returning None rather than raising.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Union

from conductor.registry.definitions import DEFAULT_ADVISOR_DEFINITIONS
from conductor.registry.schemas import AdvisorDefinition


logger = logging.getLogger(__name__)


class AdvisorRegistry:
    """
    Static catalog of advisor definitions.

    The registry is populated once at construction and never mutated, so
    it can be shared between threads without synchronization.
    """

    def __init__(self, definitions: Optional[Iterable[AdvisorDefinition]] = None):
        if definitions is None:
            definitions = DEFAULT_ADVISOR_DEFINITIONS

        self._definitions: Dict[str, AdvisorDefinition] = {}
        for definition in definitions:
            if definition.name in self._definitions:
                raise ValueError(f"Duplicate advisor definition: {definition.name}")
            self._definitions[definition.name] = definition

        logger.debug(f"[registry] Loaded {len(self._definitions)} advisor definitions")

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "AdvisorRegistry":
        """
        Load a registry from a JSON file.

        The file holds either a list of definition objects or an object
        with an ``advisors`` list.

        Args:
            path: Path to the JSON roster

        Returns:
            AdvisorRegistry populated from the file
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, dict):
            data = data.get("advisors", [])

        return cls(AdvisorDefinition.model_validate(item) for item in data)

    def get(self, name: str) -> Optional[AdvisorDefinition]:
        """Return the definition for ``name``, or None if it is not registered."""
        return self._definitions.get(name)

    def all_names(self) -> Set[str]:
        """Return the set of every registered advisor name."""
        return set(self._definitions)

    def definitions(self) -> List[AdvisorDefinition]:
        """Return all definitions, highest priority first, then by name."""
        return sorted(self._definitions.values(), key=lambda d: (-d.priority, d.name))

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)
