# Routes package init
"""
Notes API — API Routes Package
================================

Route Inventory:
    - notes.py:   GET    /notes          (list, query params as filter)
                  POST   /notes          (create)
                  PUT    /notes/{id}     (merge fields)
                  DELETE /notes/{id}     (delete)
    - health.py:  GET    /health         (service health check)

Routes stay thin: extract request data, call NoteService, return.
"""
