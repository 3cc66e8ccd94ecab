# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Loading of rule-threshold files.

Thresholds that operators may tune without a release (currently the
retention-nudge criteria in ``config/nudges.yaml``) live in small YAML
mappings. Files are parsed with ``yaml.safe_load``; every failure is
reported as YAMLLoadError carrying the offending path.

Example:
    >>> from pathlib import Path
    >>> criteria = load_yaml_section(Path("config/nudges.yaml"), "nudge_criteria")
"""

from pathlib import Path
from typing import Any

import yaml


class YAMLLoadError(Exception):
    """A threshold file is missing, unreadable or not a YAML mapping."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load {path}: {reason}")


def load_yaml(path: Path) -> dict[str, Any]:
    """Parse a YAML file whose root is a mapping.

    Args:
        path: File to parse.

    Returns:
        The parsed mapping; ``{}`` for an empty or comment-only file.

    Raises:
        YAMLLoadError: If the path is missing or a directory, cannot be
            read, is not valid YAML, or has a non-mapping root.
    """
    if not path.exists():
        raise YAMLLoadError(path, "file does not exist")
    if path.is_dir():
        raise YAMLLoadError(path, "path is a directory")

    try:
        with path.open(encoding="utf-8") as stream:
            document = yaml.safe_load(stream)
    except OSError as e:
        raise YAMLLoadError(path, f"unreadable ({e})") from e
    except yaml.YAMLError as e:
        raise YAMLLoadError(path, f"invalid YAML ({e})") from e

    if document is None:
        return {}
    if isinstance(document, dict):
        return document

    raise YAMLLoadError(path, f"root is a {type(document).__name__}, expected a mapping")


def load_yaml_section(path: Path, key: str) -> dict[str, Any]:
    """Get one section of a threshold file.

    A file that does not use ``key`` at its root is treated as the section
    itself, so both nested and flat layouts are accepted.

    Raises:
        YAMLLoadError: As load_yaml, or if the section is not a mapping.
    """
    document = load_yaml(path)
    if key not in document:
        return document

    section = document[key]
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise YAMLLoadError(path, f"section '{key}' is not a mapping")
    return section
