"""
API package containing the HTTP routes.

``router.py`` exposes a top-level ``router`` which includes every
domain router from ``endpoints``; ``create_app`` mounts it under
``/api``.
"""
