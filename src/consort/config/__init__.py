"""Configuration for the CONSORT diagram builder."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
