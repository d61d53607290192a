"""
Help Center Backend — API Routes Package
==========================================

Route Inventory:
    - auth.py:      GET  /auth/{google,github}            (start login)
                    GET  /auth/{google,github}/callback   (finish login)
                    GET  /auth/me, POST /auth/logout
    - users.py:     POST /api/users, GET/PUT /api/users/{id}
    - reports.py:   POST /api/reports
    - articles.py:  GET  /api/articles/{slug}
    - health.py:    GET  /health

Routes stay thin: pull data out of the request, call a service, shape the
response. Status codes for failures come from the exception handlers.
"""
