"""
Workflow Compiler - turns a canvas Workflow into the source of a runnable
AutoGen program.

Compilation Pipeline:
1. Validation (advisory diagnostics, never blocking)
2. Node classification (Agents, Runners, FunctionTools in node order)
3. Connection index (target id -> ordered source ids)
4. Section emission (see sections.py)
5. Assembly: non-empty sections joined by a single blank line

Compiling is a pure function of the Workflow snapshot: no I/O, no state kept
between calls, safe to call from several threads at once.
"""

import logging
import time
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field

from workflow_designer.compiler.rules import NodeKind, build_connection_index
from workflow_designer.compiler.sections import (
    GenerationDefaults, DEFAULTS,
    emit_imports, emit_structured_models, emit_function_tools, emit_model_client,
    emit_agents, emit_runners, emit_entry_point,
)
from workflow_designer.compiler.validator import validate_workflow
from workflow_designer.compiler.workflow import Workflow

logger = logging.getLogger(__name__)

# Packages the generated program needs, whatever the graph looks like.
GENERATED_DEPENDENCIES = ("autogen-agentchat", "autogen-ext")

SECTION_SEPARATOR = "\n\n"


class CodeGenerationResult(BaseModel):
    """Result of compiling a workflow."""
    model_config = ConfigDict(frozen=True)

    code: str = ""
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    dependencies: List[str] = Field(default_factory=lambda: list(GENERATED_DEPENDENCIES))


class WorkflowCompiler:
    """
    Compiles a Workflow (JSON from the canvas) into Python source. The
    compiler only holds the defaults it substitutes for blank attributes.
    """

    def __init__(self, defaults: Optional[GenerationDefaults] = None):
        self._defaults = defaults or DEFAULTS

    @property
    def defaults(self) -> GenerationDefaults:
        return self._defaults

    def compile(self, workflow: Workflow) -> CodeGenerationResult:
        """
        Compile a Workflow into source code.

        Returns a CodeGenerationResult with the code, the validator's
        diagnostics and the generated program's dependencies. Diagnostics do
        not stop generation; the caller decides whether to surface or abort.
        """
        start = time.time()

        # Step 1: Validate
        errors = validate_workflow(workflow)

        # Step 2: Classify nodes
        agents = workflow.nodes_of_kind(NodeKind.AGENT)
        runners = workflow.nodes_of_kind(NodeKind.RUNNER)
        tools = workflow.nodes_of_kind(NodeKind.FUNCTION_TOOL)

        # Step 3: Connection index
        connections = build_connection_index(workflow.edges)

        # Step 4: Emit sections
        sections = [
            emit_imports(workflow),
            emit_structured_models(agents),
            emit_function_tools(tools, self._defaults),
            emit_model_client(agents, self._defaults),
            emit_agents(agents, tools, connections, self._defaults),
            emit_runners(runners, agents, connections),
            emit_entry_point(runners, agents, self._defaults),
        ]

        # Step 5: Assemble
        code = SECTION_SEPARATOR.join(s for s in sections if s.strip())

        elapsed_ms = round((time.time() - start) * 1000, 1)
        logger.info(
            f"Compiled workflow: {len(agents)} agent(s), {len(runners)} runner(s), "
            f"{len(tools)} tool(s), {len(errors)} diagnostic(s) in {elapsed_ms}ms"
        )
        return CodeGenerationResult(
            code=code,
            errors=errors,
            dependencies=list(GENERATED_DEPENDENCIES),
        )


_default_compiler = WorkflowCompiler()


def generate_code(workflow: Workflow) -> CodeGenerationResult:
    """Compile with the built-in defaults."""
    return _default_compiler.compile(workflow)
