"""HTTP route modules."""

from kitchenpress.api.routes import articles, content, health, knowledge

__all__ = ["articles", "content", "health", "knowledge"]
