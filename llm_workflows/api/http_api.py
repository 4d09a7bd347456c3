"""
HTTP API adapter for the workflow patterns.

Architectural role:
- Expose each workflow pattern as one JSON endpoint.
- Enforce adapter-level input validation through pydantic request schemas.
- Delegate all control flow to `llm_workflows.core`.
- Map workflow failures to HTTP status codes.

Endpoint responsibilities:
- `GET /health`: liveness probe.
- `POST /v1/chain`: sequential prompt chain.
- `POST /v1/parallel`: concurrent fan-out.
- `POST /v1/route`: content-based routing.
- `POST /v1/loop`: generate/evaluate refinement with optional timeout.
- `POST /v1/orchestrate`: orchestrator-worker decomposition.

Error handling strategy:
- Schema violations -> HTTP 422 (FastAPI default), including route tables
  whose keys collide after trim + lowercase.
- `UnknownRouteError`, `MissingTemplateVariableError` and other
  `WorkflowError`s -> HTTP 400 `{"error": ...}`.
- `CompletionError` -> HTTP 502 `{"error": ...}` (sanitized provider message).
- Loop timeout -> HTTP 504.

Side effects:
- Loads environment variables at import time via `load_dotenv()`.
- Emits debug logs only when `DEBUG == "true"`.
"""

from dotenv import load_dotenv

load_dotenv()

import asyncio
import logging
import os
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from llm_workflows.core.orchestrator import TaskOrchestrator
from llm_workflows.core.refinement import loop
from llm_workflows.core.workflows import chain, parallel, route
from llm_workflows.errors import CompletionError, WorkflowError


logger = logging.getLogger(__name__)

app = FastAPI(title="llm-workflows")
# Request/response debug logging is opt-in.
DEBUG = os.getenv("DEBUG") == "true"


# ============================================================
# Request Schemas
# ============================================================

class ChainRequest(BaseModel):
    input: str
    prompts: list[str]


class ParallelRequest(BaseModel):
    prompt: str
    inputs: list[str]


class RouteRequest(BaseModel):
    input: str
    routes: dict[str, str] = Field(min_length=1)

    @field_validator("routes")
    @classmethod
    def normalize_route_keys(cls, routes: dict[str, str]) -> dict[str, str]:
        # Route keys are matched against lowercase selections.
        normalized: dict[str, str] = {}
        for key, prompt in routes.items():
            route_key = key.strip().lower()
            if route_key in normalized:
                raise ValueError(f"duplicate route key after normalization: {route_key!r}")
            normalized[route_key] = prompt
        return normalized


class LoopRequest(BaseModel):
    task: str
    evaluator_prompt: str
    generator_prompt: str
    timeout_seconds: float | None = Field(default=None, gt=0)


class OrchestrateRequest(BaseModel):
    task: str
    orchestrator_prompt: str
    worker_prompt: str
    context: dict[str, Any] = Field(default_factory=dict)


# ============================================================
# Error Mapping
# ============================================================

@app.exception_handler(CompletionError)
async def completion_error_handler(request: Request, exc: CompletionError):
    """Provider/transport failures surface as a bad gateway."""
    logger.error("Completion failed for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content={"error": str(exc)})


@app.exception_handler(WorkflowError)
async def workflow_error_handler(request: Request, exc: WorkflowError):
    """Route/template failures are caller errors."""
    if DEBUG:
        logger.debug("Workflow error for %s: %r", request.url.path, exc)
    return JSONResponse(status_code=400, content={"error": str(exc)})


# ============================================================
# Endpoints
# ============================================================

@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/v1/chain")
async def run_chain(body: ChainRequest):
    result = await chain(body.input, body.prompts)
    return {"result": result}


@app.post("/v1/parallel")
async def run_parallel(body: ParallelRequest):
    results = await parallel(body.prompt, body.inputs)
    return {"results": results}


@app.post("/v1/route")
async def run_route(body: RouteRequest):
    result = await route(body.input, body.routes)
    return {"result": result}


@app.post("/v1/loop")
async def run_loop(body: LoopRequest):
    """
    Run the refinement loop until PASS.

    The loop itself is unbounded; `timeout_seconds` bounds it from the adapter
    side and maps expiry to HTTP 504.
    """
    work = loop(body.task, body.evaluator_prompt, body.generator_prompt)
    try:
        result, history = await asyncio.wait_for(work, body.timeout_seconds)
    except asyncio.TimeoutError:
        return JSONResponse(status_code=504, content={"error": "Refinement loop timed out"})

    return {
        "result": result,
        "history": [{"thoughts": item.thoughts, "result": item.result} for item in history],
    }


@app.post("/v1/orchestrate")
async def run_orchestrate(body: OrchestrateRequest):
    orchestrator = TaskOrchestrator(body.orchestrator_prompt, body.worker_prompt)
    output = await orchestrator.process(body.task, body.context)

    if DEBUG:
        logger.debug("Orchestration produced %d worker result(s)", len(output.worker_results))

    return {
        "analysis": output.analysis,
        "worker_results": [
            {"type": item.type, "description": item.description, "result": item.result}
            for item in output.worker_results
        ],
    }
