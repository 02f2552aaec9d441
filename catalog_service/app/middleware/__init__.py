"""ASGI middleware for the catalogue API."""

from catalog_service.app.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
