from __future__ import annotations

"""
Project Configuration Domain.

Parses `.fccw` project files into a validated, immutable record naming the
source, resources and include directories. Values are workspace-relative
and re-read on every access.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fccwtree.domain.constants import (
    CONFIG_FIELDS,
    DEFAULT_INCLUDE_DIR,
    DEFAULT_RESOURCES_DIR,
    DEFAULT_SOURCE_DIR,
)
from fccwtree.domain.errors import ConfigParseError, FilesystemAccessError

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# CONFIGURATION MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CategoryRoots:
    """
    Absolute category root directories of one configuration.

    Attributes:
        source: Source directory.
        resources: Resources directory.
        include: Include directory.
    """
    source: str
    resources: str
    include: str

    def as_list(self) -> List[str]:
        """Return the roots in prefix-matching priority order."""
        return [self.source, self.resources, self.include]


@dataclass(frozen=True)
class ProjectConfig:
    """
    Validated content of a project configuration file.

    Attributes:
        source_directory: Workspace-relative source directory.
        resources_directory: Workspace-relative resources directory.
        include_directory: Workspace-relative include directory.
    """
    source_directory: Optional[str] = None
    resources_directory: Optional[str] = None
    include_directory: Optional[str] = None

    @property
    def has_combined_source(self) -> bool:
        return bool(self.source_directory or self.resources_directory)

    @property
    def has_includes(self) -> bool:
        return bool(self.include_directory)

    def combined_source_dirs(self) -> List[str]:
        """Source first, so source entries win canonical paths over resources."""
        return [d for d in (self.source_directory, self.resources_directory) if d]

    def category_roots(self, workspace_root: str) -> CategoryRoots:
        """
        Resolve the three category roots, falling back to the default layout.

        Args:
            workspace_root: Absolute workspace directory.

        Returns:
            CategoryRoots: Absolute, normalized root directories.
        """
        base = os.path.abspath(workspace_root)
        return CategoryRoots(
            source=os.path.normpath(os.path.join(base, self.source_directory or DEFAULT_SOURCE_DIR)),
            resources=os.path.normpath(os.path.join(base, self.resources_directory or DEFAULT_RESOURCES_DIR)),
            include=os.path.normpath(os.path.join(base, self.include_directory or DEFAULT_INCLUDE_DIR)),
        )


# -----------------------------------------------------------------------------
# PARSING API
# -----------------------------------------------------------------------------

def load_project_config(path: str) -> ProjectConfig:
    """
    Read and validate a project configuration file.

    Args:
        path: Absolute path to the configuration file.

    Returns:
        ProjectConfig: The parsed configuration.

    Raises:
        ConfigParseError: If the content is not a valid configuration object.
        FilesystemAccessError: If the file cannot be read.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
    except OSError as e:
        raise FilesystemAccessError(f"Cannot read configuration ({e.strerror or e})", path) from e
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"Configuration is not valid UTF-8 ({e.reason})", path) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Malformed JSON at line {e.lineno} column {e.colno}", path) from e

    config = validate_project_config(data, source=path)
    logger.debug(f"Loaded configuration {path}: {config}")
    return config


def validate_project_config(data: Any, source: Optional[str] = None) -> ProjectConfig:
    """
    Validate a decoded configuration object.

    Unknown keys are ignored. ``null`` and blank strings count as absent.

    Args:
        data: Decoded JSON value.
        source: Originating file path, used in error messages.

    Returns:
        ProjectConfig: The validated configuration.

    Raises:
        ConfigParseError: On a non-object document or an invalid field.
    """
    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Invalid configuration: expected object, received {type(data).__name__}", source
        )

    values: Dict[str, Optional[str]] = {}
    for key, attr in CONFIG_FIELDS.items():
        values[attr] = _as_relative_dir(data.get(key), key, source)

    unknown = sorted(k for k in data if k not in CONFIG_FIELDS)
    if unknown:
        logger.debug(f"Ignoring unknown configuration keys {unknown} in {source}")

    return ProjectConfig(**values)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _as_relative_dir(value: Any, field: str, source: Optional[str]) -> Optional[str]:
    """Validate one directory field."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigParseError(
            f"Invalid field '{field}': expected str, received {type(value).__name__}", source
        )

    v = value.strip()
    if not v:
        return None
    if os.path.isabs(v):
        raise ConfigParseError(f"Invalid field '{field}': '{v}' must be workspace-relative", source)
    return v
