"""Middleware package."""

from sims_api.middleware.path_prefix_middleware import PathPrefixMiddleware
from sims_api.middleware.request_id_middleware import RequestIDMiddleware
from sims_api.middleware.security_headers_middleware import SecurityHeadersMiddleware

__all__ = [
    "PathPrefixMiddleware",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
]
