"""
Request id tracking and rate limiting shared by main.py and the routers.
"""

from middleware.request_id import RequestIDMiddleware, get_request_id, request_id_ctx
from middleware.rate_limiter import limiter

__all__ = ["RequestIDMiddleware", "get_request_id", "request_id_ctx", "limiter"]
