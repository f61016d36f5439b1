# Routes package init
"""
Notekeeper Backend — API Routes Package
=========================================

Route Inventory:
    - notes.py:   GET/POST /api/notes, GET/PUT/DELETE /api/notes/{id}
    - users.py:   GET/POST /api/users
    - login.py:   POST /api/login
    - health.py:  GET /health

Routes stay thin: extract request data, call a service, let the global
exception handlers turn service errors into status codes.
"""
