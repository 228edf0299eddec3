"""
NoteKeeper Backend: Package Initializer
=======================================

What: Two small HTTP servers sharing one package.
      - Notes service: CRUD API over named text notes kept in a JSON file.
      - Cache server: serves static files from a cache directory.

Architecture Note:
    The notes service follows the same layering throughout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │        NoteStore (Business Logic)   │  ← uniqueness, mutation rules
    ├─────────────────────────────────────┤
    │         Schemas (Data Contracts)    │  ← Pydantic models
    ├─────────────────────────────────────┤
    │       Persister (Durable Storage)   │  ← whole-file JSON document
    └─────────────────────────────────────┘

    Routes receive the store through a dependency, so every layer can be
    exercised on its own in tests.
"""

__version__ = "1.0.0"
