"""
Bahía Escondida Cashless — Application Package Initializer
============================================================

What: Marks the `app` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (one call per op)     │  ← filters, defaults, error mapping
    ├─────────────────────────────────────┤
    │          Schemas (Pydantic)         │  ← request/response contracts
    ├─────────────────────────────────────┤
    │     Database (Storage Adapter)      │  ← MongoDB client + collections
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
