"""Catalog service: directory listings with signed keyset pagination."""

__version__ = "0.1.0"
