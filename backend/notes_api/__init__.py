"""
Notes API — Application Package Initializer
=============================================

What: Marks the `notes_api` directory as a Python package.
Who:  Imported by uvicorn (`notes_api.main:app`), pytest, and the console script.

Architecture Note:
    The service is a thin layered stack over one MongoDB collection:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Note Repository)     │  ← One store call per operation
    ├─────────────────────────────────────┤
    │          Schemas (Pydantic)         │  ← Request/response contracts
    ├─────────────────────────────────────┤
    │   Database (Mongo Store Connector)  │  ← One long-lived motor client
    └─────────────────────────────────────┘

    Routes map outcomes to status codes; the repository translates each
    request into exactly one collection operation; the connector owns the
    client lifecycle.
"""

__version__ = "1.0.0"
