"""
Service layer.

``StudentStore`` owns the registered students and their log;
``RegistrationService`` and ``SearchService`` hold the business rules
on top of it.  API handlers only talk to the services.
"""
