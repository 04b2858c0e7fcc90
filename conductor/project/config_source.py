"""
Project configuration source.

Reads the two files that describe a project to the advisor team:

- ``<root>/.conductor/conductor.config.json``: enabled advisors, framework,
  experience level and feature flags
- ``<root>/package.json``: dependencies and scripts

Missing files yield empty sections. A file that exists but is not valid
JSON raises ProjectConfigError.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field

from conductor.orchestration.errors import ProjectConfigError


logger = logging.getLogger(__name__)


CONFIG_FILE_NAME = "conductor.config.json"
PACKAGE_FILE_NAME = "package.json"


def normalize_advisor_name(name: str) -> str:
    """Return ``name`` in the ``@name`` form used by the registry."""
    name = name.strip()
    return name if name.startswith("@") else f"@{name}"


class ProjectConfig(BaseModel):
    """Project metadata consumed verbatim into advisor contexts."""

    project_root: str = Field(description="Absolute path of the project")
    config: Dict[str, Any] = Field(default_factory=dict, description="conductor.config.json contents")
    package_info: Dict[str, Any] = Field(default_factory=dict, description="package.json contents")
    loaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def enabled_advisors(self) -> List[str]:
        """
        Advisors enabled for this project, in configuration order.

        Reads ``subagents`` (a list of names) or, failing that, ``agents``
        (a list of names or of ``{"name", "enabled"}`` objects).
        """
        entries = self.config.get("subagents") or self.config.get("agents") or []
        names: List[str] = []
        for entry in entries:
            if isinstance(entry, str):
                name = entry
            elif isinstance(entry, dict) and entry.get("name") and entry.get("enabled", True):
                name = entry["name"]
            else:
                continue
            name = normalize_advisor_name(name)
            if name not in names:
                names.append(name)
        return names

    def as_context(self) -> Dict[str, Any]:
        """Project section shared by every advisor's context."""
        return {
            "config": self.config,
            "package_info": self.package_info,
            "project_path": self.project_root,
            "timestamp": self.loaded_at.isoformat(),
        }


class ProjectConfigSource:
    """Loads ProjectConfig from a project root on disk."""

    def __init__(self, config_dir_name: str = ".conductor"):
        self.config_dir_name = config_dir_name

    def _read_json(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ProjectConfigError(f"Could not read {path}: {e}") from e

        if not isinstance(data, dict):
            raise ProjectConfigError(f"Expected a JSON object in {path}")
        return data

    def load(self, project_root: Union[str, Path]) -> ProjectConfig:
        """
        Load the project configuration under ``project_root``.

        Args:
            project_root: Root directory of the project

        Returns:
            ProjectConfig (sections are empty when files are absent)

        Raises:
            ProjectConfigError: If a present file cannot be parsed
        """
        root = Path(project_root).resolve()
        config = self._read_json(root / self.config_dir_name / CONFIG_FILE_NAME)
        package_info = self._read_json(root / PACKAGE_FILE_NAME)

        logger.info(
            f"[project] Loaded configuration | root={root}, "
            f"has_config={bool(config)}, has_package={bool(package_info)}"
        )

        return ProjectConfig(
            project_root=str(root),
            config=config,
            package_info=package_info,
        )
