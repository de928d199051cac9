"""Inbound HTTP surface."""

from epic_cloner.api.app import create_app

__all__ = ["create_app"]
