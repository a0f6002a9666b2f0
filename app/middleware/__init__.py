"""HTTP middleware: request and correlation ids.

Applied in main app; order matters (first added = outermost).
"""

from app.middleware.request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
