"""
Service layer.

Each service encapsulates the business logic of one domain and talks
to persistence only through the ``RecordStore`` it is constructed
with.  Services raise the exceptions from ``core.errors``; turning
them into HTTP responses is left to the endpoint handlers.
"""
