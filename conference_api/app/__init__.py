"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (content, speakers, registrations, pages,
users) has a service in ``services`` and a router in
``api/endpoints``.  Persistence is hidden behind the ``RecordStore``
interface in ``storage`` so handlers never touch files or database
connections directly.
"""

from .main import app  # noqa: F401
