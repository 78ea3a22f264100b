"""
================================================================================
Config Resolver
================================================================================

Resolves '#'-delimited paths against a nested configuration document.

Example document (.json files are read with json, anything else with PyYAML):

    {
        "browser-mode": "headless",
        "login": {
            "username": {"type": "id", "locator": "user-input"}
        }
    }

    >>> resolver = ConfigResolver("config.json")
    >>> resolver.resolve("login#username#locator")
    'user-input'

The document is re-read on every call; nothing is cached between calls.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from loguru import logger

from webhelper.common.global_config import get_config
from webhelper.framework.exceptions import (
    ConfigLoadError,
    ConfigPathError,
    KeyNotFoundError,
    NotAnObjectError,
    TypeMismatchError,
)


PATH_DELIMITER = "#"


@dataclass(frozen=True)
class Scalar:
    """Leaf node. ``value`` is whatever the document held (not always a str)."""
    value: Any


@dataclass(frozen=True)
class Nested:
    """Object node mapping keys to child nodes."""
    children: Mapping[str, "ConfigNode"]


ConfigNode = Union[Scalar, Nested]


def build_tree(raw: Any) -> ConfigNode:
    """Convert a parsed document into Scalar/Nested nodes."""
    if isinstance(raw, dict):
        return Nested({str(key): build_tree(value) for key, value in raw.items()})
    return Scalar(raw)


def lookup(tree: Nested, path: str) -> str:
    """
    Walk ``tree`` along ``path`` and return the string at its final field.

    Raises:
        NotAnObjectError: A navigation segment is missing or not an object
        KeyNotFoundError: The final field is missing
        TypeMismatchError: The final field is not a string
    """
    segments = path.split(PATH_DELIMITER)
    field = segments[-1]

    node: ConfigNode = tree
    for segment in segments[:-1]:
        child = node.children.get(segment) if isinstance(node, Nested) else None
        if not isinstance(child, Nested):
            logger.error(f"Invalid config path: {path}")
            raise NotAnObjectError(f"Invalid config path: {path}", path)
        node = child

    if field not in node.children:
        logger.error(f"Locator not found for config path: '{path}'")
        raise KeyNotFoundError(f"Locator not found for config path: {path}", path)

    value = node.children[field]
    if not isinstance(value, Scalar) or not isinstance(value.value, str):
        logger.error(f"Config path '{path}' does not resolve to a valid string value")
        raise TypeMismatchError(
            f"Config path does not resolve to a valid string value: {path}", path
        )

    return value.value


class ConfigResolver:
    """
    Reads values from the locator document by '#'-delimited path.

    Unlike the framework settings in ``global_config``, this document is
    loaded fresh for each resolution so edits are picked up immediately.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None) -> None:
        """
        Args:
            config_path: Path to the document. Defaults to the
                ``locators.file`` setting.
        """
        self.config_path = Path(config_path or get_config("locators.file", "config.json"))

    def load(self) -> Nested:
        """Parse the document into a tree."""
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                if self.config_path.suffix.lower() == ".json":
                    raw = json.load(f)
                else:
                    raw = yaml.safe_load(f)
        except OSError as e:
            logger.error(f"Error reading config file: {e}")
            raise ConfigLoadError(f"Cannot read config file {self.config_path}: {e}") from e
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            logger.error(f"Error parsing config file: {e}")
            raise ConfigLoadError(f"Invalid config file {self.config_path}: {e}") from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigLoadError(
                f"Config file {self.config_path} must contain an object at the top level"
            )
        return build_tree(raw)

    def resolve(self, path: str) -> str:
        """Return the string stored at ``path``."""
        value = lookup(self.load(), path)
        logger.info(f"Retrieved value for config path '{path}': {value}")
        return value

    def get(self, path: str, default: Optional[str] = None) -> Optional[str]:
        """Like resolve(), but returns ``default`` for unresolvable paths."""
        try:
            return self.resolve(path)
        except ConfigPathError:
            return default


__all__ = [
    "PATH_DELIMITER",
    "Scalar",
    "Nested",
    "ConfigNode",
    "build_tree",
    "lookup",
    "ConfigResolver",
]
