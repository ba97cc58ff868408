"""
Recipe Server: Middleware Package
====================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log line can use it
    2. Logging: records status and duration once the response is built
    3. GZip / CORS: FastAPI's built-in middleware
"""
