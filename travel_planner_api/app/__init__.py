"""
Application package initializer.

The project is organised into layers: ``core`` (configuration,
logging, persistence, security and errors), ``schemas`` (request and
response models), ``services`` (ownership checks and business rules)
and ``api`` (HTTP routes).  Each resource (trips, itineraries,
activities, expenses, reminders, users) has a schema module, a service
and a router in ``api/v1/endpoints``.
"""

from .main import app  # noqa: F401
