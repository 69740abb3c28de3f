"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from city_wellbeing.api.auth import router as auth_router
from city_wellbeing.api.dependencies import require_api_key, require_user
from city_wellbeing.api.schemas import SaveRecordRequest
from city_wellbeing.app_logging import configure_logging
from city_wellbeing.containers import AppContainer
from city_wellbeing.domain.errors import (
    NotFoundError,
    PersistenceError,
    UpstreamError,
    ValidationError,
    WellbeingError,
)
from city_wellbeing.domain.models import UserRecord


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    settings = container.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        max_age=settings.session_max_age_seconds,
        same_site="lax",
        https_only=False,
    )

    @app.exception_handler(WellbeingError)
    async def wellbeing_error_handler(
        request: Request, exc: WellbeingError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code, content={"message": exc.message}
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "message": "Invalid request.",
                "error": _format_validation_errors(exc),
            },
        )

    app.include_router(auth_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/calculate-score")
    async def calculate_score(
        request: Request, city: str | None = None
    ) -> JSONResponse:
        """Aggregate the raw inputs of a city's wellbeing score."""
        if not city:
            raise ValidationError("City parameter is required.")
        state_container: AppContainer = request.app.state.container
        try:
            inputs = await state_container.score_service.aggregate(city)
        except (NotFoundError, UpstreamError) as exc:
            logger.error("API Aggregation Failed: %s", exc.message)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "message": "Failed to fetch city data from external APIs.",
                    "error": exc.message,
                },
            )
        return JSONResponse(inputs.to_payload())

    @app.post("/saveData", dependencies=[Depends(require_api_key)])
    async def save_data(
        payload: SaveRecordRequest,
        request: Request,
        user: UserRecord = Depends(require_user),
    ) -> JSONResponse:
        """Save a finished score for the logged-in user."""
        state_container: AppContainer = request.app.state.container
        try:
            record = state_container.record_service.save_record(
                payload.to_record(user.id)
            )
        except PersistenceError as exc:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"message": "Failed to save record", "error": exc.message},
            )
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content={
                "message": "Record saved successfully",
                "record": record.to_payload(),
            },
        )

    @app.get("/records", dependencies=[Depends(require_api_key)])
    async def list_records(
        request: Request, user: UserRecord = Depends(require_user)
    ) -> JSONResponse:
        """Return the logged-in user's records, best score first."""
        state_container: AppContainer = request.app.state.container
        try:
            records = state_container.record_service.list_records(user.id)
        except PersistenceError as exc:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "message": "Failed to retrieve records",
                    "error": exc.message,
                },
            )
        return JSONResponse([record.to_payload() for record in records])

    if settings.static_dir:
        static_root = Path(settings.static_dir).resolve()
        if static_root.is_dir():
            _mount_frontend(app, static_root)
        else:
            logger.warning("Static directory not found: %s", static_root)

    return app


def _mount_frontend(app: FastAPI, static_root: Path) -> None:
    """Serve the front-end bundle, falling back to index.html for SPA routes."""
    index_file = static_root / "index.html"

    @app.get("/{full_path:path}", include_in_schema=False)
    async def frontend(full_path: str) -> FileResponse:
        candidate = (static_root / full_path).resolve()
        if candidate.is_file() and candidate.is_relative_to(static_root):
            return FileResponse(candidate)
        if not index_file.is_file():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return FileResponse(index_file)


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten FastAPI validation errors into one readable line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)
