"""
Tests for workflow validation diagnostics.
Run: pytest tests/test_validator.py -v
"""
from workflow_designer.compiler.validator import validate_workflow
from workflow_designer.compiler.workflow import Workflow, WorkflowEdge


NO_AGENT = "workflow requires at least one Agent node"
NO_RUNNER = "workflow requires at least one Runner node to execute a task"


class TestValidator:

    def test_empty_workflow_stops_early(self):
        assert validate_workflow(Workflow()) == ["no nodes in workflow"]

    def test_connected_pair_is_clean(self, helper_workflow):
        assert validate_workflow(helper_workflow) == []

    def test_missing_agent(self, runner_node):
        wf = Workflow(nodes=[runner_node("r1", "Do it")])
        assert validate_workflow(wf) == [
            NO_AGENT,
            "Runner node 'Do it' is not connected to any Agent",
        ]

    def test_missing_runner(self, agent_node):
        wf = Workflow(nodes=[agent_node("a", "A"), agent_node("b", "B")])
        assert validate_workflow(wf) == [NO_RUNNER]

    def test_runner_linked_to_one_of_several_agents(self, agent_node, runner_node, edge):
        wf = Workflow(
            nodes=[agent_node("a", "A"), agent_node("b", "B"), runner_node("r", "go")],
            edges=[edge("a", "r")],
        )
        assert validate_workflow(wf) == []

    def test_only_tool_node(self, tool_node):
        wf = Workflow(nodes=[tool_node("f")])
        assert validate_workflow(wf) == [NO_AGENT, NO_RUNNER]

    def test_disconnected_runner_label_falls_back_to_id(self, agent_node, runner_node):
        wf = Workflow(nodes=[agent_node("a", "A"), runner_node("runner-42", "")])
        assert validate_workflow(wf) == ["Runner node 'runner-42' is not connected to any Agent"]

    def test_runner_fed_only_by_dangling_edge_is_disconnected(self, agent_node, runner_node):
        wf = Workflow(
            nodes=[agent_node("a", "A"), runner_node("r", "task")],
            edges=[WorkflowEdge(id="e1", source="ghost", target="r")],
        )
        errors = validate_workflow(wf)
        assert "Runner node 'task' is not connected to any Agent" in errors
        assert "edge 'e1' references unknown node 'ghost'" in errors

    def test_duplicate_names_reported_once(self, agent_node, runner_node, edge):
        wf = Workflow(
            nodes=[
                agent_node("a1", "Twin"),
                agent_node("a2", "Twin"),
                agent_node("a3", "Twin"),
                runner_node("r", "go"),
            ],
            edges=[edge("a1", "r")],
        )
        assert validate_workflow(wf) == ["duplicate Agent name: Twin"]

    def test_each_duplicated_name_reported(self, agent_node, runner_node, edge):
        wf = Workflow(
            nodes=[
                agent_node("a1", "B"), agent_node("a2", "A"),
                agent_node("a3", "A"), agent_node("a4", "B"),
                runner_node("r", "go"),
            ],
            edges=[edge("a1", "r")],
        )
        assert validate_workflow(wf) == ["duplicate Agent name: A", "duplicate Agent name: B"]

    def test_names_are_case_sensitive(self, agent_node, runner_node, edge):
        wf = Workflow(
            nodes=[agent_node("a1", "Bot"), agent_node("a2", "bot"), runner_node("r", "go")],
            edges=[edge("a1", "r")],
        )
        assert validate_workflow(wf) == []

    def test_empty_names_not_duplicates(self, agent_node, runner_node, edge):
        wf = Workflow(
            nodes=[agent_node("a1", ""), agent_node("a2", ""), runner_node("r", "go")],
            edges=[edge("a1", "r")],
        )
        assert validate_workflow(wf) == []

    def test_check_order(self, agent_node, runner_node):
        wf = Workflow(nodes=[
            agent_node("a1", "X"), agent_node("a2", "X"), runner_node("r", "go"),
        ])
        assert validate_workflow(wf) == [
            "Runner node 'go' is not connected to any Agent",
            "duplicate Agent name: X",
        ]

    def test_illegal_edge_reported(self, agent_node, runner_node, edge):
        wf = Workflow(
            nodes=[agent_node("a", "A"), runner_node("r", "go")],
            edges=[edge("a", "r"), edge("r", "a", edge_id="back")],
        )
        assert validate_workflow(wf) == [
            "edge 'back' connects runner to agent, which is not a valid connection",
        ]

    def test_validation_does_not_mutate(self, helper_workflow):
        before = helper_workflow.model_dump()
        validate_workflow(helper_workflow)
        assert helper_workflow.model_dump() == before
