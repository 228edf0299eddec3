# Middleware package init
"""
NoteKeeper Backend: Middleware Package
======================================

What:  Cross-cutting concerns applied to every request on both servers.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line and any error body carry
    the same correlation ID.
"""
