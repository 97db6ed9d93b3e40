"""Storefront domain API package."""

from storefront.api.routes import delivery_router

__all__ = ["delivery_router"]
