# Middleware package init
"""
Notekeeper Backend — Middleware Package
========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the logging middleware can tag its access line
    with the id; the id is also added to every response header.
"""
