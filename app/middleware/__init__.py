"""
Middleware components for request processing.

- Request context (request ID and client IP bound into the log context)
- CORS for the browser dashboards
"""

from app.middleware.cors import CORSMiddleware
from app.middleware.request_context import RequestContextMiddleware

__all__ = [
    "CORSMiddleware",
    "RequestContextMiddleware",
]
