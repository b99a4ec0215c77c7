"""
Workflow Designer — FastAPI Server
REST API for the visual canvas: connection checks while wiring nodes,
workflow validation, and AutoGen code generation.
"""

import logging
from typing import Optional, Dict, Any
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from workflow_designer.config.settings import settings
from workflow_designer.compiler.compiler import WorkflowCompiler, CodeGenerationResult, GENERATED_DEPENDENCIES
from workflow_designer.compiler.rules import NodeKind, edge_role
from workflow_designer.compiler.sections import GenerationDefaults
from workflow_designer.compiler.validator import validate_workflow
from workflow_designer.compiler.workflow import Workflow, WorkflowFormatError, load_workflow

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

PLATFORM_NAME = "Workflow Designer"
VERSION = "1.0.0"


# ── Global Instances ──────────────────────────────────────────────────────────

workflow_compiler = WorkflowCompiler(GenerationDefaults.from_settings(settings))


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"{PLATFORM_NAME} {VERSION} starting "
        f"(environment={settings.environment}, model={workflow_compiler.defaults.model})"
    )
    yield
    logger.info(f"{PLATFORM_NAME} shutting down")


_openapi_tags = [
    {"name": "System", "description": "Health checks and platform info"},
    {"name": "Connections", "description": "Connection rules between node kinds"},
    {"name": "Workflows", "description": "Workflow validation and AutoGen code generation"},
]

app = FastAPI(
    title=PLATFORM_NAME,
    description=(
        "## AutoGen Agents Workflow Designer\n\n"
        "Compile visual Agent / Runner / FunctionTool workflows into runnable "
        "AutoGen programs.\n"
    ),
    version=VERSION,
    lifespan=lifespan,
    openapi_tags=_openapi_tags,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request/Response Models ───────────────────────────────────────────────────

class ConnectionCheckRequest(BaseModel):
    source_type: NodeKind
    target_type: NodeKind


class ConnectionCheckResponse(BaseModel):
    valid: bool
    edge_type: Optional[str] = None


def _parse_workflow(document: Dict[str, Any]) -> Workflow:
    try:
        return load_workflow(document)
    except WorkflowFormatError as e:
        logger.warning(f"Rejected workflow document: {e}")
        raise HTTPException(422, str(e))


# ══════════════════════════════════════════════════════════════════════════════
# HEALTH & INFO
# ══════════════════════════════════════════════════════════════════════════════

@app.get("/health", tags=["System"])
async def health():
    return {"status": "ok", "environment": settings.environment}


@app.get("/info", tags=["System"])
async def info():
    return {
        "platform": PLATFORM_NAME,
        "version": VERSION,
        "node_types": [k.value for k in NodeKind],
        "default_model": workflow_compiler.defaults.model,
        "dependencies": list(GENERATED_DEPENDENCIES),
    }


# ══════════════════════════════════════════════════════════════════════════════
# CONNECTIONS
# ══════════════════════════════════════════════════════════════════════════════

@app.post("/connections/check", tags=["Connections"], response_model=ConnectionCheckResponse)
async def check_connection(req: ConnectionCheckRequest):
    """Whether the canvas may draw an edge between two node kinds, and its role."""
    role = edge_role(req.source_type, req.target_type)
    return ConnectionCheckResponse(valid=role is not None, edge_type=role.value if role else None)


# ══════════════════════════════════════════════════════════════════════════════
# WORKFLOWS
# ══════════════════════════════════════════════════════════════════════════════

@app.post("/workflows/validate", tags=["Workflows"])
async def validate_workflow_document(document: Dict[str, Any]):
    """Validate a saved-workflow document without generating code."""
    workflow = _parse_workflow(document)
    errors = validate_workflow(workflow)
    return {"valid": len(errors) == 0, "errors": errors}


@app.post("/workflows/compile", tags=["Workflows"], response_model=CodeGenerationResult)
async def compile_workflow_document(document: Dict[str, Any]):
    """Generate AutoGen source for a saved-workflow document. Diagnostics are returned, not raised."""
    workflow = _parse_workflow(document)
    result = workflow_compiler.compile(workflow)
    if result.errors:
        logger.info(f"Workflow compiled with {len(result.errors)} diagnostic(s)")
    return result


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
