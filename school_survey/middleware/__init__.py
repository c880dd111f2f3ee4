"""
School Survey Backend — Middleware Package
============================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID for every log line of the request
    2. Logging: one access line per request, tagged with that ID
    3. GZip / CORS: FastAPI's stock middleware

Responses pass back through the chain in reverse, so the X-Request-ID
header is set and the access line carries the final status and duration.
"""
