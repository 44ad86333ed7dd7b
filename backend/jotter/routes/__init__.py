# Routes package init
"""
Jotter Backend: API Routes Package
===================================

Route Inventory:
    - notes.py:   POST/GET/DELETE /notes, GET/DELETE /notes/{id}
    - health.py:  GET /health

Routes handle HTTP concerns only: read the request, call the NoteStore,
pick the status code and body.
"""
