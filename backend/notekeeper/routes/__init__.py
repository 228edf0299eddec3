# Routes package init
"""
NoteKeeper Backend: API Routes Package
======================================

Route Inventory:
    - notes.py:   GET    /notes              (list all notes)
                  GET    /notes/{name}       (note text)
                  PUT    /notes/{name}       (replace note text)
                  DELETE /notes/{name}       (remove note)
                  POST   /write              (create from the upload form)
    - pages.py:   GET    /                   (redirect to the upload form)
                  GET    /UploadForm.html    (upload form)
    - health.py:  GET    /health             (service health check)

Routes stay thin: extract request data, call the NoteStore, pick the status
code. Errors are raised and formatted by the global handlers in main.py.
"""
