"""FastAPI interface for the agentstory toolkit.

Key Components:
    - app: FastAPI application instance
    - create_app: Factory function for app creation
    - run_server: CLI entry point for server

Endpoints:
    - POST /validate/story - Validate a story
    - POST /validate/story/partial - Validate a draft story
    - POST /validate/skill - Validate a skill
    - POST /completeness - Completeness report
    - POST /export - Export a story to harnesses
    - GET /adapters - List harness adapters
    - GET /health - Health check

Example:
    >>> from agentstory.interfaces.api import app, run_server
    >>>
    >>> # Run with uvicorn directly
    >>> # uvicorn agentstory.interfaces.api:app --reload
    >>>
    >>> # Or use the run_server function
    >>> run_server(host="127.0.0.1", port=8000)
"""

from agentstory.interfaces.api.server import (
    app,
    create_app,
    register_routes,
    run_server,
    AppState,
    get_state,
    # Request models
    ExportRequest,
    # Response models
    AdapterInfoResponse,
    HealthResponse,
)

__all__ = [
    # Application
    "app",
    "create_app",
    "register_routes",
    "run_server",
    # State
    "AppState",
    "get_state",
    # Request models
    "ExportRequest",
    # Response models
    "AdapterInfoResponse",
    "HealthResponse",
]
