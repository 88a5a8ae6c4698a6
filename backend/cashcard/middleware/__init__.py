# Middleware package init
"""
Cash Card API: Middleware Package
=================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → Route Handler

    1. Request ID: assign correlation ID, expose it to loggers
    2. Logging: log method, path, status and duration with that ID

    Responses travel back through the chain in reverse, so the
    X-Request-ID header is added after the access line is written.
"""
