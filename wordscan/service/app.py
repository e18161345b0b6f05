"""FastAPI application entrypoint for wordscan service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..models import AnalysisReport
from ..orchestrator import AnalysisOptions, Orchestrator


class AnalyzeRequest(BaseModel):
    path: str
    extension: Optional[str] = None
    workers: Optional[int] = Field(default=None, ge=1)
    top_words: Optional[int] = Field(default=None, ge=0)
    min_size: Optional[int] = Field(default=None, ge=0)
    max_size: Optional[int] = Field(default=None, ge=0)
    min_words: Optional[int] = Field(default=None, ge=0)
    analyzers: Optional[List[str]] = None


class AnalyzerOutput(BaseModel):
    name: str
    data: Any = None
    error: Optional[str] = None


class FileOutput(BaseModel):
    file_name: str
    size: int
    results: List[AnalyzerOutput]


class WordCountOutput(BaseModel):
    word: str
    count: int


class AnalyzeResponse(BaseModel):
    files: List[FileOutput]
    total_words: int
    total_lines: int
    top_words: List[WordCountOutput]


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def _to_response(report: AnalysisReport) -> AnalyzeResponse:
    return AnalyzeResponse(
        files=[
            FileOutput(
                file_name=bundle.file_name,
                size=bundle.size,
                results=[
                    AnalyzerOutput(name=result.name, data=result.data, error=result.error)
                    for result in bundle.results
                ],
            )
            for bundle in report.files
        ],
        total_words=report.total_words,
        total_lines=report.total_lines,
        top_words=[
            WordCountOutput(word=entry.word, count=entry.count) for entry in report.top_words
        ],
    )


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing wordscan operations."""
    app = FastAPI(title="WordScan Service", version="0.1.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze(
        payload: AnalyzeRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> AnalyzeResponse:
        options = AnalysisOptions(
            extension=payload.extension,
            workers=payload.workers,
            top_words=payload.top_words,
            min_size=payload.min_size,
            max_size=payload.max_size,
            min_words=payload.min_words,
            analyzers=payload.analyzers,
        )

        def _run() -> AnalysisReport:
            return orchestrator.run_analysis(payload.path, options)

        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(None, _run)
        return _to_response(report)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(_: Any, exc: RuntimeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    try:
        import uvicorn
    except ModuleNotFoundError as exc:
        raise RuntimeError(
            "uvicorn is required to run the service. Install it with `pip install uvicorn`."
        ) from exc

    uvicorn.run(create_app(), host=host, port=port)
