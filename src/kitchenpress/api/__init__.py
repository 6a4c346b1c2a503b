"""HTTP API."""

from kitchenpress.api.app import create_app

__all__ = ["create_app"]
