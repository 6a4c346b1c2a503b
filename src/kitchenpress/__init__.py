"""KitchenPress - duplicate detection and content drafting for restaurant-industry news."""

from kitchenpress.__version__ import __version__

__all__ = ["__version__"]
