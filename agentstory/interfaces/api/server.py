"""FastAPI server for the Agent Story validation API.

Endpoints:
    - POST /validate/story - Validate a complete story
    - POST /validate/story/partial - Validate a draft (top-level sections optional)
    - POST /validate/skill - Validate a single skill
    - POST /completeness - Completeness report for a story
    - POST /export - Validate and export a story to harnesses
    - GET /adapters - List harness adapters
    - GET /health - Health check

Validation endpoints always answer 200 with ``{valid, errors, warnings}``;
an invalid document is a normal result, not an HTTP error. Endpoints that
need a valid story (export, completeness) answer 422 with the same body
when it is not.

Example:
    >>> from agentstory.interfaces.api.server import create_app
    >>>
    >>> app = create_app()
    >>> # Run with uvicorn
    >>> # uvicorn agentstory.interfaces.api.server:app --reload
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import Body, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from agentstory import __version__
from agentstory.config.settings import AgentStorySettings, get_settings
from agentstory.core.exceptions import (
    AdapterNotFoundError,
    AgentStoryError,
    IncompatibleStoryError,
    StoryValidationError,
)
from agentstory.export.registry import AdapterRegistry, export_story, get_default_registry
from agentstory.validation.completeness import get_story_completeness
from agentstory.validation.validator import StoryValidator


# =============================================================================
# Module Logger
# =============================================================================

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

API_DESCRIPTION = """
Validate Agent Stories and export them to agent harnesses.

- **Structural validation** reports blocking errors with field paths and codes.
- **Consistency checks** report advisory warnings.
- **Export** turns a valid story into Claude Code, Letta or AgentSkills.io files.
"""


# =============================================================================
# Request/Response Models
# =============================================================================


class ExportRequest(BaseModel):
    """Request to export a story."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    story: Any = Field(..., description="Agent Story document")
    adapter_ids: Optional[list[str]] = Field(
        None, description="Adapters to run; defaults to every compatible adapter"
    )
    include_source: bool = Field(False, description="Include the story JSON in the response")


class AdapterInfoResponse(BaseModel):
    id: str
    name: str
    description: str
    url: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    adapters: list[str]
    uptime_seconds: float


# =============================================================================
# Application State
# =============================================================================


@dataclass
class AppState:
    """Application state."""

    settings: AgentStorySettings
    validator: StoryValidator
    registry: AdapterRegistry
    start_time: datetime


def get_state(request: Request) -> AppState:
    """Get the state of the application serving ``request``."""
    return request.app.state.story_state


# =============================================================================
# Create Application
# =============================================================================


def create_app(
    settings: Optional[AgentStorySettings] = None,
    registry: Optional[AdapterRegistry] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; defaults to ``get_settings()``.
        registry: Adapter registry; defaults to the shared registry.

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.api.title,
        description=API_DESCRIPTION,
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.story_state = AppState(
        settings=settings,
        validator=StoryValidator(strict_mode=settings.validation.strict),
        registry=registry if registry is not None else get_default_registry(),
        start_time=datetime.now(timezone.utc),
    )

    register_routes(app)
    return app


def register_routes(app: FastAPI) -> None:
    """Register all API routes.

    Args:
        app: FastAPI application
    """

    # =========================================================================
    # Health & Info
    # =========================================================================

    @app.get("/health", response_model=HealthResponse, tags=["System"], summary="Health check")
    def health_check(request: Request) -> HealthResponse:
        state = get_state(request)
        uptime = (datetime.now(timezone.utc) - state.start_time).total_seconds()
        return HealthResponse(
            status="healthy",
            version=__version__,
            adapters=state.registry.ids(),
            uptime_seconds=uptime,
        )

    @app.get(
        "/adapters",
        response_model=list[AdapterInfoResponse],
        tags=["Export"],
        summary="List harness adapters",
    )
    def list_adapters(request: Request) -> list[AdapterInfoResponse]:
        return [
            AdapterInfoResponse(**info.to_dict())
            for info in get_state(request).registry.info_list()
        ]

    # =========================================================================
    # Validation
    # =========================================================================

    @app.post("/validate/story", tags=["Validation"], summary="Validate a story")
    def validate_story_endpoint(request: Request, document: Any = Body(...)) -> dict[str, Any]:
        return get_state(request).validator.validate_story(document).to_dict()

    @app.post("/validate/story/partial", tags=["Validation"], summary="Validate a draft story")
    def validate_partial_endpoint(request: Request, document: Any = Body(...)) -> dict[str, Any]:
        return get_state(request).validator.validate_partial_story(document).to_dict()

    @app.post("/validate/skill", tags=["Validation"], summary="Validate a skill")
    def validate_skill_endpoint(request: Request, document: Any = Body(...)) -> dict[str, Any]:
        return get_state(request).validator.validate_skill(document).to_dict()

    @app.post("/completeness", tags=["Validation"], summary="Story completeness report")
    def completeness_endpoint(request: Request, document: Any = Body(...)) -> dict[str, Any]:
        result = get_state(request).validator.validate_story(document)
        if not result.valid:
            raise StoryValidationError("Story is not structurally valid", result=result)
        return get_story_completeness(result.data).to_dict()

    # =========================================================================
    # Export
    # =========================================================================

    @app.post("/export", tags=["Export"], summary="Export a story to harnesses")
    def export_endpoint(request: Request, body: ExportRequest) -> dict[str, Any]:
        state = get_state(request)
        result = export_story(
            body.story,
            adapter_ids=body.adapter_ids,
            include_source=body.include_source,
            registry=state.registry,
        )
        return result.to_dict()

    # =========================================================================
    # Error Handlers
    # =========================================================================

    @app.exception_handler(StoryValidationError)
    async def story_validation_handler(request: Request, exc: StoryValidationError) -> JSONResponse:
        content = exc.result.to_dict() if exc.result is not None else {"valid": False, "errors": [], "warnings": []}
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=content)

    @app.exception_handler(AdapterNotFoundError)
    async def adapter_not_found_handler(request: Request, exc: AdapterNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": exc.message, "code": exc.code, "available": exc.available_adapters},
        )

    @app.exception_handler(IncompatibleStoryError)
    async def incompatible_story_handler(request: Request, exc: IncompatibleStoryError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"error": exc.message, "code": exc.code, "missingFeatures": exc.missing_features},
        )

    @app.exception_handler(AgentStoryError)
    async def toolkit_error_handler(request: Request, exc: AgentStoryError) -> JSONResponse:
        logger.warning("Request failed: %s", exc.to_log_dict())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": exc.message, "code": exc.code},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unexpected error: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "code": "INTERNAL_ERROR"},
        )


# =============================================================================
# Application Instance
# =============================================================================

app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================


def run_server(
    host: str = "127.0.0.1",
    port: int = 8000,
    reload: bool = False,
) -> None:
    """Run the API server.

    Args:
        host: Host to bind to
        port: Port to listen on
        reload: Enable auto-reload for development
    """
    import uvicorn

    uvicorn.run(
        "agentstory.interfaces.api.server:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    run_server(reload=True)


__all__ = [
    "app",
    "create_app",
    "register_routes",
    "run_server",
    "AppState",
    "get_state",
    "ExportRequest",
    "AdapterInfoResponse",
    "HealthResponse",
]
