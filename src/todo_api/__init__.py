"""
Todo API package.

A CRUD HTTP API for Todo items served by FastAPI on top of a pluggable
storage interface. The application instance lives in ``todo_api.main``.
"""

__version__ = "0.1.0"
