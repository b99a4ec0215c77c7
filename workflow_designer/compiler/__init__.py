"""Workflow Compiler - Compile visual agent workflows into runnable AutoGen programs"""
from .rules import NodeKind, EdgeRole, edge_role, is_valid_connection, build_connection_index
from .workflow import (
    Workflow, WorkflowNode, WorkflowEdge, WorkflowFormatError,
    AgentNodeData, RunnerNodeData, FunctionToolNodeData, Parameter,
    load_workflow, load_workflow_file,
)
from .validator import validate_workflow
from .naming import sanitize_identifier
from .compiler import WorkflowCompiler, CodeGenerationResult, generate_code

__all__ = [
    "NodeKind",
    "EdgeRole",
    "edge_role",
    "is_valid_connection",
    "build_connection_index",
    "Workflow",
    "WorkflowNode",
    "WorkflowEdge",
    "WorkflowFormatError",
    "AgentNodeData",
    "RunnerNodeData",
    "FunctionToolNodeData",
    "Parameter",
    "load_workflow",
    "load_workflow_file",
    "validate_workflow",
    "sanitize_identifier",
    "WorkflowCompiler",
    "CodeGenerationResult",
    "generate_code",
]
