"""
Service layer.

Each service encapsulates the business rules of one resource and is
constructed with the application's ``Database``.  Ownership checks are
shared through ``ownership.OwnershipResolver`` and the common create
and update helpers live in ``lifecycle``.
"""
