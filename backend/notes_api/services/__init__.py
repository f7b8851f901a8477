# Services package init
"""
Notes API — Services Layer
============================

What:  The note repository, between routes (HTTP) and the MongoDB collection.

Service Inventory:
    - NoteService: list / create / delete / update over one collection handle
    - get_note_service: FastAPI dependency binding NoteService to the app's store
"""
