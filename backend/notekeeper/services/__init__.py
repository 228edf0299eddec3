# Services package init
"""
NoteKeeper Backend: Services Layer
==================================

What:  Business logic between the routes (HTTP) and the notes document.

Service Inventory:
    - NoteStore: owns the notes, enforces unique names, persists on mutation
    - JsonFilePersister / AtomicJsonFilePersister: whole-document storage
"""
