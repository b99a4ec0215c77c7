"""
Shared fixtures for the Workflow Designer test suite.
"""
import sys
import os
import pytest

# Ensure project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

os.environ["ENVIRONMENT"] = "dev"
os.environ.setdefault("LOG_LEVEL", "INFO")


@pytest.fixture
def compiler():
    """Fresh WorkflowCompiler with built-in defaults."""
    from workflow_designer.compiler.compiler import WorkflowCompiler
    return WorkflowCompiler()


@pytest.fixture
def agent_node():
    """Factory for Agent nodes."""
    from workflow_designer.compiler.workflow import WorkflowNode

    def make(node_id, name="New Agent", **data):
        return WorkflowNode(id=node_id, type="agent", data={"name": name, **data})
    return make


@pytest.fixture
def runner_node():
    """Factory for Runner nodes."""
    from workflow_designer.compiler.workflow import WorkflowNode

    def make(node_id, task="", mode="sync", **data):
        return WorkflowNode(
            id=node_id, type="runner",
            data={"input": task, "execution_mode": mode, **data},
        )
    return make


@pytest.fixture
def tool_node():
    """Factory for FunctionTool nodes."""
    from workflow_designer.compiler.workflow import WorkflowNode

    def make(node_id, name="new_function", parameters=None, return_type="str", implementation=""):
        return WorkflowNode(
            id=node_id, type="functionTool",
            data={
                "name": name,
                "parameters": parameters or [],
                "returnType": return_type,
                "implementation": implementation,
            },
        )
    return make


@pytest.fixture
def edge():
    """Factory for edges."""
    from workflow_designer.compiler.workflow import WorkflowEdge

    def make(source, target, edge_id=None):
        return WorkflowEdge(id=edge_id or f"{source}-{target}", source=source, target=target)
    return make


@pytest.fixture
def helper_workflow(agent_node, runner_node, edge):
    """One Agent "Helper" executing one sync Runner."""
    from workflow_designer.compiler.workflow import Workflow
    return Workflow(
        nodes=[agent_node("agent-1", "Helper"), runner_node("runner-1", "Hello World!", "sync")],
        edges=[edge("agent-1", "runner-1")],
    )
