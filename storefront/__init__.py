"""Storefront catalog API: categories, products and uploaded images."""

__version__ = "0.1.0"
