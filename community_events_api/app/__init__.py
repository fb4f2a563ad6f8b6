"""
Application package initializer.

The project is organised into layers: ``core`` (configuration,
logging, database, security, errors), ``stores`` (event persistence
behind a swappable interface), ``services`` (business logic) and
``api`` (versioned HTTP routers).  Each domain (events, users,
contact, feedback) exposes a router defined in ``api/v1/endpoints``.
"""
