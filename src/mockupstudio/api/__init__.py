"""MockupAI Studio — FastAPI REST API layer.

This package contains the FastAPI application, Pydantic request models, and
the in-memory session store.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request validation.
session_store
    In-memory session ownership and gallery pagination.
"""
