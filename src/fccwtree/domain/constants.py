from __future__ import annotations

"""
Domain Constants.

Centralizes the workspace layout conventions: configuration file extension,
default category directory names and the labels of the logical sections.
"""

from typing import Dict

CONFIG_EXTENSION = ".fccw"

# -----------------------------------------------------------------------------
# CATEGORY ROOT DEFAULTS (workspace-relative)
# -----------------------------------------------------------------------------
DEFAULT_SOURCE_DIR = "web-src"
DEFAULT_RESOURCES_DIR = "res"
DEFAULT_INCLUDE_DIR = "include"

# Keys of the project configuration object
SOURCE_KEY = "sourceDirectory"
RESOURCES_KEY = "resourcesDirectory"
INCLUDE_KEY = "includeDirectory"

CONFIG_FIELDS: Dict[str, str] = {
    SOURCE_KEY: "source_directory",
    RESOURCES_KEY: "resources_directory",
    INCLUDE_KEY: "include_directory",
}

# -----------------------------------------------------------------------------
# PRESENTATION LABELS
# -----------------------------------------------------------------------------
COMBINED_SOURCE_LABEL = "Combined source"
INCLUDES_LABEL = "Includes"
NO_WORKSPACE_LABEL = "No .fccw workspace found"
