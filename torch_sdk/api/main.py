"""FastAPI application for the Torch quote service."""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from torch_sdk import __version__
from torch_sdk.api.endpoints import router
from torch_sdk.errors import TorchSDKError
from torch_sdk.logging import configure_logging

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("TORCH_SERVICE_HOST", "0.0.0.0")
PORT = int(os.environ.get("TORCH_SERVICE_PORT", "8000"))
DEBUG = os.environ.get("TORCH_SERVICE_DEBUG", "false").lower() in ("true", "1", "yes")

logger = structlog.get_logger()

app = FastAPI(
    title="Torch Quote Service",
    description="Quotes and call descriptors for Torch DEX swaps, deposits and withdraws",
    version=__version__,
)


@app.exception_handler(TorchSDKError)
async def sdk_error_handler(request: Request, exc: TorchSDKError) -> JSONResponse:
    """Report SDK failures as 422 with the error kind."""
    logger.warning("sdk_error", path=request.url.path, error=type(exc).__name__, detail=str(exc))
    return JSONResponse(
        status_code=422,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the quote service.

    Configuration via environment variables:
    - TORCH_SERVICE_HOST: Host to bind to (default: 0.0.0.0)
    - TORCH_SERVICE_PORT: Port to bind to (default: 8000)
    - TORCH_SERVICE_DEBUG: Enable debug logging and reload (default: false)
    """
    configure_logging(DEBUG)
    uvicorn.run(
        "torch_sdk.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
