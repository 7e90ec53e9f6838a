"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from upstage_adapter import __version__
from upstage_adapter.config import get_settings
from upstage_adapter.core import (
    UpstageApiError,
    create_client,
    create_pipeline,
    log_error,
    policy_for,
)
from upstage_adapter.models import ChatItem
from upstage_adapter.utils import configure_logging, get_logger

logger = get_logger(__name__)


class ChatExecuteRequest(BaseModel):
    """Batch of chat items handed over by the host."""

    items: list[ChatItem] = Field(default_factory=list)
    continue_on_fail: bool | None = Field(
        default=None,
        description="Overrides the configured continue-on-fail policy",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info(
        "startup",
        version=__version__,
        host=settings.host,
        port=settings.port,
        base_url=settings.upstage_base_url,
    )

    client = create_client(
        settings.upstage_api_key,
        base_url=settings.upstage_base_url,
        timeout_ms=settings.request_timeout_ms,
    )
    app.state.settings = settings
    app.state.client = client
    app.state.pipeline = create_pipeline(client)

    yield

    logger.info("shutdown")


app = FastAPI(
    title="Upstage Solar Adapter",
    description="Runs Upstage Solar chat completions for workflow items",
    version=__version__,
    lifespan=lifespan,
)


def _error_response(error: UpstageApiError) -> JSONResponse:
    # Only upstream failure statuses are forwarded; a 2xx with a bad body is a gateway error
    if error.status_code and error.status_code >= 400:
        status_code = error.status_code
    elif error.is_validation_error:
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        status_code = status.HTTP_502_BAD_GATEWAY
    return JSONResponse(status_code=status_code, content={"error": error.to_dict()})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get("/ready")
async def readiness_check() -> dict[str, str]:
    """Readiness check endpoint."""
    return {"status": "ready"}


@app.post("/v1/chat/execute")
async def chat_execute(body: ChatExecuteRequest, request: Request) -> JSONResponse:
    """Run chat items through the pipeline."""
    pipeline = request.app.state.pipeline
    continue_on_fail = body.continue_on_fail
    if continue_on_fail is None:
        continue_on_fail = request.app.state.settings.continue_on_fail

    logger.info("request.received", items=len(body.items), continue_on_fail=continue_on_fail)

    try:
        results = await pipeline.run(body.items, policy_for(continue_on_fail))
    except UpstageApiError as e:
        logger.error("request.failed", error=e.message, error_code=e.code)
        return _error_response(e)

    return JSONResponse(
        content={"results": [r.model_dump(mode="json", by_alias=True) for r in results]}
    )


@app.get("/v1/models")
async def list_models(request: Request) -> JSONResponse:
    """Proxy the upstream model list."""
    try:
        models = await request.app.state.client.get_models()
    except UpstageApiError as e:
        log_error(e, e.context)
        return _error_response(e)
    return JSONResponse(content=models)


def main():
    """CLI entry point."""
    import uvicorn
    settings = get_settings()

    uvicorn.run(
        "upstage_adapter.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
