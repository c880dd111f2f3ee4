# Services package init
"""
School Survey Backend — Services Layer
========================================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - SubmissionService:    inserts guardian, teacher and student questionnaires
    - SchoolSearchService:  autocomplete lookup over the school directory
    - SchemaService:        idempotent creation of the submission tables

Services receive their AsyncSession / AsyncEngine per call, so they hold no
connection state and can be unit-tested with mocks.
"""
