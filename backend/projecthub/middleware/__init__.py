"""
ProjectHub Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Chain (outermost first, as registered in main.create_app):
    RequestID → Logging → Session → GZip → CORS → route handler

    - request_id.py: correlation id in a ContextVar and X-Request-ID header
    - logging.py:    access log line with status-dependent level

SessionMiddleware, GZipMiddleware and CORSMiddleware come from Starlette.
"""
