"""FastAPI application exposing generate and scaffold operations."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, List

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import load_config
from ..errors import NgToolingError
from ..generator import GenerationReport, Generator
from ..scaffold import Scaffolder, ScaffoldResult


class GenerateRequest(BaseModel):
    path: str


class GenerateResponse(BaseModel):
    status: str
    written: List[str]
    skipped: List[str]
    failed: List[str]


class ScaffoldRequest(BaseModel):
    root: str
    parent: str
    name: str


class ScaffoldResponse(BaseModel):
    component: str
    files: List[str]


class HealthResponse(BaseModel):
    status: str


def _default_generator() -> Generator:
    return Generator()


def create_app(
    generator_factory: Callable[[], Generator] = _default_generator,
) -> FastAPI:
    """Create the FastAPI application exposing ng-tooling operations."""

    app = FastAPI(title="ng-tooling", version="1.0.0")

    async def get_generator() -> Generator:
        return generator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateRequest,
        generator: Generator = Depends(get_generator),
    ) -> GenerateResponse:
        loop = asyncio.get_running_loop()
        report: GenerationReport = await loop.run_in_executor(
            None, generator.run_path, payload.path
        )
        return GenerateResponse(
            status=report.status,
            written=[str(path) for path in report.written],
            skipped=report.skipped,
            failed=report.failed,
        )

    @app.post("/scaffold", response_model=ScaffoldResponse)
    async def scaffold(payload: ScaffoldRequest) -> ScaffoldResponse:
        def _run_scaffold() -> ScaffoldResult:
            config = load_config(Path(payload.root))
            parent = Path(payload.parent)
            if not parent.is_absolute():
                parent = config.root / parent
            return Scaffolder().scaffold(parent, payload.name, config)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, _run_scaffold)
        return ScaffoldResponse(
            component=str(result.component),
            files=[str(path) for path in result.files],
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NgToolingError)
    async def ngtooling_error_handler(
        _: Any, exc: NgToolingError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    uvicorn.run(create_app(), host=host, port=port)
