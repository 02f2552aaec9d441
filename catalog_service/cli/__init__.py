"""Command line interface for catalog-service."""
