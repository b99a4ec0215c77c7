"""
Workflow Schema - the graph the canvas hands to the code generator.
Every saved workflow serializes to this format:

    {
      "nodes": [{"id": ..., "type": "agent", "position": {"x": 0, "y": 0}, "data": {...}}],
      "edges": [{"id": ..., "source": ..., "target": ..., "type": "execute"}]
    }

An edge's role is never stored on the model; it is derived from the kinds of
its endpoints (see rules.py), so the "type" key on a saved edge is ignored on
load and recomputed on export.
"""

import json
import uuid
from pathlib import Path
from typing import Optional, Dict, List, Any, Literal, Union
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, ValidationError, model_validator

from workflow_designer.compiler.rules import NodeKind, EdgeRole, edge_role


class WorkflowFormatError(ValueError):
    """Raised when a saved workflow document cannot be parsed into a Workflow."""


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class Parameter(BaseModel):
    """A single argument of a FunctionTool."""
    name: str
    type: str = "str"  # str, int, float, bool, list, dict
    description: Optional[str] = None
    required: bool = True


class _NodeDataModel(BaseModel):
    """Base for node attribute models. A null attribute reads as unset and takes its default."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class AgentNodeData(_NodeDataModel):
    """Attributes of an Agent node."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = "New Agent"
    description: str = ""
    system_message: str = ""
    output_type: Literal["text", "json", "structured"] = "text"
    structured_schema: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("structured_schema", "pydantic_model"),
    )


class RunnerNodeData(_NodeDataModel):
    """Attributes of a Runner node."""
    name: Optional[str] = "New Runner"
    input: str = ""
    context: str = ""
    execution_mode: Literal["sync", "async"] = "sync"


class FunctionToolNodeData(_NodeDataModel):
    """Attributes of a FunctionTool node."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = "new_function"
    parameters: List[Parameter] = Field(default_factory=list)
    return_type: str = Field(default="str", alias="returnType")
    implementation: str = ""


NodeData = Union[AgentNodeData, RunnerNodeData, FunctionToolNodeData]

_DATA_MODELS = {
    NodeKind.AGENT: AgentNodeData,
    NodeKind.RUNNER: RunnerNodeData,
    NodeKind.FUNCTION_TOOL: FunctionToolNodeData,
}


class WorkflowNode(BaseModel):
    """A single node on the canvas."""
    id: str
    type: NodeKind
    position: Position = Field(default_factory=Position)
    data: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_data(self) -> "WorkflowNode":
        self.get_typed_data()
        return self

    def get_typed_data(self) -> NodeData:
        """Parse the data dict into the attribute model for this node's kind."""
        return _DATA_MODELS[self.type].model_validate(self.data)


class WorkflowEdge(BaseModel):
    """A directed connection between two nodes."""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:8])
    source: str
    target: str


class Workflow(BaseModel):
    """
    Snapshot of a canvas: nodes in palette/creation order plus the edges
    between them. Node order is significant; it decides declaration order in
    the generated program and which Runner is "first".
    """
    nodes: List[WorkflowNode] = Field(default_factory=list)
    edges: List[WorkflowEdge] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "Workflow":
        seen = set()
        for n in self.nodes:
            if n.id in seen:
                raise ValueError(f"duplicate node id '{n.id}'")
            seen.add(n.id)
        return self

    def get_node(self, node_id: str) -> Optional[WorkflowNode]:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def nodes_of_kind(self, kind: NodeKind) -> List[WorkflowNode]:
        return [n for n in self.nodes if n.type == kind]

    def get_incoming_edges(self, node_id: str) -> List[WorkflowEdge]:
        return [e for e in self.edges if e.target == node_id]

    def get_outgoing_edges(self, node_id: str) -> List[WorkflowEdge]:
        return [e for e in self.edges if e.source == node_id]

    def edge_role(self, edge: WorkflowEdge) -> Optional[EdgeRole]:
        """Derived role of an edge; None when an endpoint is missing or the pair is illegal."""
        source = self.get_node(edge.source)
        target = self.get_node(edge.target)
        if not source or not target or source.id == target.id:
            return None
        return edge_role(source.type, target.type)

    def can_connect(self, source_id: str, target_id: str) -> bool:
        """Whether the canvas may add an edge from source_id to target_id."""
        return self.edge_role(WorkflowEdge(source=source_id, target=target_id)) is not None

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the saved-workflow format, with each edge's derived type."""
        doc = self.model_dump(mode="json")
        for edge_doc, edge in zip(doc["edges"], self.edges):
            role = self.edge_role(edge)
            edge_doc["type"] = role.value if role else None
        return doc


def load_workflow(document: Any) -> Workflow:
    """
    Build a Workflow from a saved-workflow document.

    Missing or non-list "nodes"/"edges" entries are treated as empty.

    Raises:
        WorkflowFormatError: If the document is not an object, or a node or
            edge fails schema validation (unknown node type, bad attribute).
    """
    if not isinstance(document, dict):
        raise WorkflowFormatError("workflow document must be a JSON object at the top level")

    nodes = document.get("nodes")
    edges = document.get("edges")
    try:
        return Workflow(
            nodes=nodes if isinstance(nodes, list) else [],
            edges=edges if isinstance(edges, list) else [],
        )
    except ValidationError as e:
        raise WorkflowFormatError(f"invalid workflow document: {e}") from e


def load_workflow_file(path: Union[str, Path]) -> Workflow:
    """
    Load a saved workflow.json file.

    Raises:
        FileNotFoundError: If the file does not exist.
        WorkflowFormatError: If the file is not valid JSON or not a valid workflow.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as fh:
        try:
            document = json.load(fh)
        except json.JSONDecodeError as e:
            raise WorkflowFormatError(f"{path}: not valid JSON ({e})") from e
    return load_workflow(document)
