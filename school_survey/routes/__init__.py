# Routes package init
"""
School Survey Backend — API Routes Package
============================================

Route Inventory:
    - submissions.py:   POST /api/submit-form            (guardians)
                        POST /api/submit-form/teachers
                        POST /api/submit-form/students
    - schools.py:       GET  /api/search-schools?q=      (autocomplete)
    - health.py:        GET  /health                     (database probe)
    - client_shell.py:  GET  /{path}                     (static files + shell)

Routes stay thin: read the request, call a service, shape the response.
"""
