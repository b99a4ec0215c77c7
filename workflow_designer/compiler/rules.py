"""
Connectivity Rules - which node kinds may be wired together, and in which role.
The canvas asks these rules before admitting an edge; the compiler re-derives
every edge's role from them instead of trusting a stored value.
"""

from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from workflow_designer.compiler.workflow import WorkflowEdge


class NodeKind(str, Enum):
    """Node types offered by the component palette."""
    AGENT = "agent"
    RUNNER = "runner"
    FUNCTION_TOOL = "functionTool"


class EdgeRole(str, Enum):
    """Role of a connection, fully determined by its endpoint kinds."""
    HANDOFF = "handoff"    # Agent -> Agent
    TOOL = "tool"          # FunctionTool -> Agent
    EXECUTE = "execute"    # Agent -> Runner


CONNECTION_RULES: Dict[Tuple[NodeKind, NodeKind], EdgeRole] = {
    (NodeKind.AGENT, NodeKind.AGENT): EdgeRole.HANDOFF,
    (NodeKind.FUNCTION_TOOL, NodeKind.AGENT): EdgeRole.TOOL,
    (NodeKind.AGENT, NodeKind.RUNNER): EdgeRole.EXECUTE,
}


def edge_role(source_kind: NodeKind, target_kind: NodeKind) -> Optional[EdgeRole]:
    """Return the derived role for a source/target kind pair, or None if illegal."""
    return CONNECTION_RULES.get((NodeKind(source_kind), NodeKind(target_kind)))


def is_valid_connection(source_kind: NodeKind, target_kind: NodeKind) -> bool:
    return edge_role(source_kind, target_kind) is not None


def build_connection_index(edges: Iterable["WorkflowEdge"]) -> Dict[str, List[str]]:
    """
    Map each target node id to the ids of the nodes feeding it.

    Sources keep the order in which their edges appear; nothing is sorted
    or deduplicated.
    """
    index: Dict[str, List[str]] = {}
    for edge in edges:
        index.setdefault(edge.target, []).append(edge.source)
    return index
