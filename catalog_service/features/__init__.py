"""Catalogue features: one package per listed entity."""
