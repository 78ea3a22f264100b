"""Page objects addressed by config path."""

from .page_base import BasePage

__all__ = ["BasePage"]
