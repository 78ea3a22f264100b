"""
================================================================================
Locators
================================================================================

'#'-delimited config path resolution and typed locator descriptors.

Author: Automation Team
License: MIT
================================================================================
"""

from .config_resolver import ConfigResolver, Nested, Scalar
from .locator import LocatorDescriptor, LocatorKind, build_locator

__all__ = [
    "ConfigResolver",
    "Nested",
    "Scalar",
    "LocatorDescriptor",
    "LocatorKind",
    "build_locator",
]
