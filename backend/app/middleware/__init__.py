# Middleware package init
"""
Bahía Escondida Cashless — Middleware Package
===============================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: correlation ID used by loggers and error bodies
    2. Logging: method, path, status, duration with the request ID
    3. CORS: FastAPI's CORSMiddleware (the POS frontend runs on another origin)
"""
