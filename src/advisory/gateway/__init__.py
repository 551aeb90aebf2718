"""CORS forwarding gateway (FastAPI)."""

from advisory.gateway.app import create_app
from advisory.gateway.proxy import CORS_HEADERS, forward_request

__all__ = ["CORS_HEADERS", "create_app", "forward_request"]
