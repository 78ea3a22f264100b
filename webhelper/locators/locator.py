"""
================================================================================
Locator Descriptors
================================================================================

Typed (kind, value) pairs built from config entries of the form

    "username": {"type": "id", "locator": "user-input"}

and their translation to Playwright selector strings.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Dict

from loguru import logger

from webhelper.framework.exceptions import UnsupportedLocatorTypeError
from webhelper.locators.config_resolver import PATH_DELIMITER, ConfigResolver


class LocatorKind(str, Enum):
    """Supported locator strategies. Values are the config 'type' spellings."""

    ID = "id"
    NAME = "name"
    XPATH = "xpath"
    CSS = "css"
    LINK_TEXT = "linktext"
    PARTIAL_LINK_TEXT = "partiallinktext"
    TAG_NAME = "tagname"
    CLASS_NAME = "classname"


# Lower-cased config 'type' -> kind
LOCATOR_KINDS: Dict[str, LocatorKind] = {kind.value: kind for kind in LocatorKind}


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _xpath_literal(value: str) -> str:
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    parts = ", '\"', ".join(f'"{part}"' for part in value.split('"'))
    return f"concat({parts})"


@dataclass(frozen=True)
class LocatorDescriptor:
    """How to find one UI element."""

    kind: LocatorKind
    value: str

    @property
    def selector(self) -> str:
        """Playwright selector equivalent of this descriptor."""
        if self.kind is LocatorKind.ID:
            return f"id={self.value}"
        if self.kind is LocatorKind.NAME:
            return f"css=[name={_quote(self.value)}]"
        if self.kind is LocatorKind.XPATH:
            return f"xpath={self.value}"
        if self.kind is LocatorKind.LINK_TEXT:
            return f"css=a:text-is({_quote(self.value)})"
        if self.kind is LocatorKind.PARTIAL_LINK_TEXT:
            # Case-sensitive substring match on the link text
            return f"xpath=//a[contains(., {_xpath_literal(self.value)})]"
        if self.kind is LocatorKind.CLASS_NAME:
            return f"css=[class~={_quote(self.value)}]"
        # CSS and TAG_NAME are plain CSS selectors
        return f"css={self.value}"

    def __str__(self) -> str:
        return f"By.{self.kind.name.lower()}: {self.value}"


def parse_kind(locator_type: str, path: str = "") -> LocatorKind:
    """Map a config 'type' string to a LocatorKind, case-insensitively."""
    kind = LOCATOR_KINDS.get(locator_type.lower())
    if kind is None:
        logger.error(f"Invalid locator type: '{locator_type}'")
        raise UnsupportedLocatorTypeError(locator_type, path)
    return kind


def build_locator(resolver: ConfigResolver, path: str) -> LocatorDescriptor:
    """
    Build a descriptor from ``path#type`` and ``path#locator``.

    Resolution errors propagate unchanged.

    Raises:
        ConfigPathError: Either field cannot be resolved
        UnsupportedLocatorTypeError: The type is not one of LocatorKind
    """
    locator_type = resolver.resolve(f"{path}{PATH_DELIMITER}type")
    locator_value = resolver.resolve(f"{path}{PATH_DELIMITER}locator")

    kind = parse_kind(locator_type, path)
    logger.info(f"Retrieved locator of type '{kind.value}' for config path '{path}'")
    return LocatorDescriptor(kind=kind, value=locator_value)


__all__ = [
    "LocatorKind",
    "LOCATOR_KINDS",
    "LocatorDescriptor",
    "parse_kind",
    "build_locator",
]
