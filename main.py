"""
FastAPI Application Entry Point

Exposes the configured proving backend over HTTP:
  - Verification key lookup
  - Proof task submission
  - Task status polling
  - Health checks

Run: uvicorn main:app --reload --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from infra import get_config
from prover import (
    CircuitType,
    GetVkRequest,
    GetVkResponse,
    ProveRequest,
    ProveResponse,
    ProvingService,
    QueryTaskRequest,
    QueryTaskResponse,
)

config = get_config()

# Setup logging
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: build the proving backend once, close it on shutdown.
    """
    # Startup
    logger.info("=" * 60)
    logger.info("Prover adapter starting up...")
    logger.info(f"Config: {config!r}")
    missing = config.validate()
    if missing:
        logger.warning(f"Missing required environment variables: {', '.join(missing)}")
    logger.info("=" * 60)

    app.state.service = config.create_proving_service()

    yield

    # Shutdown
    logger.info("Prover adapter shutting down...")
    await app.state.service.aclose()


app = FastAPI(
    title="Prover Adapter API",
    description="Proof generation through a remote proving backend",
    version="1.0.0",
    lifespan=lifespan,
)


# Middleware for logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    logger.debug(f"{request.method} {request.url.path}")
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"Request error: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )


def _service(request: Request) -> ProvingService:
    return request.app.state.service


# Proving endpoints
@app.get("/vks/{circuit_version}/{circuit_type}", response_model=GetVkResponse)
async def get_vk(circuit_version: str, circuit_type: int, request: Request):
    """Fetch the verification key for a circuit version and type code."""
    return await _service(request).get_vk(
        GetVkRequest(
            circuit_type=CircuitType.from_u8(circuit_type),
            circuit_version=circuit_version,
        )
    )


@app.post("/tasks", response_model=ProveResponse)
async def prove(body: ProveRequest, request: Request):
    """Submit a proof task."""
    return await _service(request).prove(body)


@app.get("/tasks/{task_id}", response_model=QueryTaskResponse)
async def query_task(task_id: str, request: Request):
    """Poll a task's status and, once finished, its proof."""
    return await _service(request).query_task(QueryTaskRequest(task_id=task_id))


# Health check endpoints
@app.get("/health/live")
async def health_live():
    """Live health check (Kubernetes liveness probe)."""
    return {"status": "alive"}


@app.get("/health/ready")
async def health_ready(request: Request):
    """Readiness health check (Kubernetes readiness probe)."""
    missing = config.validate()
    if missing:
        return {"status": "not_ready", "reason": f"missing: {', '.join(missing)}"}
    return {
        "status": "ready",
        "backend": config.backend,
        "is_local": _service(request).is_local(),
    }


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Prover Adapter API",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "get_vk": "GET /vks/{circuit_version}/{circuit_type}",
            "prove": "POST /tasks",
            "query_task": "GET /tasks/{task_id}",
            "health_live": "GET /health/live",
            "health_ready": "GET /health/ready",
        },
    }


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(os.getenv("PROVER_PORT", "8000")),
    )
