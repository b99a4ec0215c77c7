"""
Workflow Validator - structural checks run before code generation.

Diagnostics are advisory: the compiler always produces best-effort code and
returns these messages next to it. Nothing here raises.
"""

import logging
from typing import List

from workflow_designer.compiler.rules import NodeKind
from workflow_designer.compiler.workflow import Workflow

logger = logging.getLogger(__name__)


def validate_workflow(workflow: Workflow) -> List[str]:
    """Validate a workflow for common errors. Returns list of diagnostic messages."""
    errors: List[str] = []

    if not workflow.nodes:
        errors.append("no nodes in workflow")
        return errors

    agents = workflow.nodes_of_kind(NodeKind.AGENT)
    runners = workflow.nodes_of_kind(NodeKind.RUNNER)

    if not agents:
        errors.append("workflow requires at least one Agent node")

    if not runners:
        errors.append("workflow requires at least one Runner node to execute a task")

    # Each Runner needs an Agent feeding it
    for runner in runners:
        has_agent = False
        for e in workflow.get_incoming_edges(runner.id):
            source = workflow.get_node(e.source)
            if source and source.type == NodeKind.AGENT:
                has_agent = True
                break
        if not has_agent:
            label = runner.get_typed_data().input or runner.id
            errors.append(f"Runner node '{label}' is not connected to any Agent")

    # Agent names should be unique; report each repeated name once
    seen = set()
    duplicates: List[str] = []
    for agent in agents:
        name = agent.get_typed_data().name
        if not name:
            continue
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    for name in duplicates:
        errors.append(f"duplicate Agent name: {name}")

    # Edges must reference existing nodes and follow the connection rules
    for e in workflow.edges:
        source = workflow.get_node(e.source)
        target = workflow.get_node(e.target)
        if not source:
            errors.append(f"edge '{e.id}' references unknown node '{e.source}'")
        if not target:
            errors.append(f"edge '{e.id}' references unknown node '{e.target}'")
        if source and target and workflow.edge_role(e) is None:
            errors.append(
                f"edge '{e.id}' connects {source.type.value} to {target.type.value}, "
                f"which is not a valid connection"
            )

    if errors:
        logger.debug(f"Workflow validation produced {len(errors)} diagnostic(s)")
    return errors
