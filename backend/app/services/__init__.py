# Services package init
"""
Notekeeper Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services receive the request's AsyncSession per call and return
       response schemas; they raise app.exceptions errors, never HTTP errors.

Service Inventory:
    - AuthService: password hashing, login, bearer token issue/verify
    - UserService: signup and user listing (credential store)
    - NoteService: note lifecycle with ownership and validation rules
"""
