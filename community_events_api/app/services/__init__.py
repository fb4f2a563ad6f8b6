"""
Service layer.

Each service encapsulates the business logic of one domain.  The event
catalog and the registration ledger are instantiated with an
``EventStore``; the user and form services are stateless classes
working directly on the SQLite connection helpers.
"""
