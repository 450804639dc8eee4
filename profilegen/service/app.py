"""FastAPI application entrypoint for profilegen service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

try:  # pragma: no cover - optional dependency
    from fastapi import Depends, FastAPI
    from fastapi.responses import JSONResponse
    from pydantic import BaseModel

    _FASTAPI_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - service mode optional
    FastAPI = None  # type: ignore[assignment]
    Depends = None  # type: ignore[assignment]
    JSONResponse = None  # type: ignore[assignment]
    BaseModel = object  # type: ignore[assignment]
    _FASTAPI_AVAILABLE = False

from ..orchestrator import GenerationOutcome, LanguageReport, Orchestrator


class LanguagesRequest(BaseModel):
    path: str


class LanguageEntry(BaseModel):
    name: str
    percentage: float
    bar: str
    percentage_str: str


class LanguagesResponse(BaseModel):
    languages: List[LanguageEntry]
    repositories_total: int
    repositories_eligible: int
    dropped: List[str]


class GenerateRequest(BaseModel):
    path: str
    dry_run: bool = False


class GenerateResponse(BaseModel):
    path: str
    written: bool
    content: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing profilegen operations."""

    if not _FASTAPI_AVAILABLE:  # pragma: no cover - validated via unit tests
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install profilegen[service]`."
        )

    app = FastAPI(title="profilegen Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/languages", response_model=LanguagesResponse)
    async def languages(
        payload: LanguagesRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> LanguagesResponse:
        loop = asyncio.get_running_loop()
        report: LanguageReport = await loop.run_in_executor(
            None, orchestrator.language_report, payload.path
        )
        return LanguagesResponse(
            languages=[
                LanguageEntry(
                    name=language.name,
                    percentage=language.percentage,
                    bar=language.bar,
                    percentage_str=language.percentage_str,
                )
                for language in report.languages
            ],
            repositories_total=report.repositories_total,
            repositories_eligible=report.repositories_eligible,
            dropped=report.dropped,
        )

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        def _run() -> GenerationOutcome:
            return orchestrator.run(payload.path, dry_run=payload.dry_run)

        loop = asyncio.get_running_loop()
        outcome = await loop.run_in_executor(None, _run)
        return GenerateResponse(
            path=str(outcome.path),
            written=outcome.written,
            content=outcome.content if payload.dry_run else None,
        )

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    if not _FASTAPI_AVAILABLE:
        raise RuntimeError(
            "FastAPI is required for service mode. Install it with `pip install profilegen[service]`."
        )

    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install profilegen[service]`."
        ) from exc

    app = create_app()
    uvicorn.run(app, host=host, port=port)
