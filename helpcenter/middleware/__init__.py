"""
Help Center Backend — Middleware Package
==========================================

Request path (outermost first):
    [Request ID] → [Logging] → [Session (OAuth state)] → [GZip] → [CORS] → route

    1. Request ID: correlation id in a ContextVar and the X-Request-ID header
    2. Logging: one access line per request, with that id and the duration
    3. SessionMiddleware (Starlette): signed cookie holding OAuth state between
       the provider redirect and the callback
"""
