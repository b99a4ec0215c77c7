"""
Section Emitters - one function per section of the generated AutoGen program.

Each emitter is a pure function of the node subset it is given (plus the
connection index where it needs relationships) and returns a text fragment.
An emitter with nothing to say returns "" and the assembler drops it.

Sections, in assembly order:
    imports              always; extra lines for tools / multi-agent teams
    structured models    pydantic classes for Agents with structured output
    function tools       one def per FunctionTool node
    model client         shared get_model_client() factory
    agents               one AssistantAgent(...) per Agent node
    runners              reserved, always empty
    entry point          main() shaped by the number of Agents and Runner mode
"""

import keyword
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict

from workflow_designer.compiler.naming import python_string, sanitize_identifier
from workflow_designer.compiler.rules import NodeKind
from workflow_designer.compiler.workflow import (
    Workflow, WorkflowNode, AgentNodeData, RunnerNodeData, FunctionToolNodeData,
)
from workflow_designer.compiler.writer import CodeWriter


class GenerationDefaults(BaseModel):
    """Values substituted into the generated program when the graph leaves them blank."""
    model_config = ConfigDict(frozen=True)

    model: str = "gpt-4o"
    agent_name: str = "unnamed_agent"
    task: str = "Hello World!"
    termination_token: str = "TERMINATE"
    tool_name: str = "new_function"
    return_type: str = "str"

    @classmethod
    def from_settings(cls, settings) -> "GenerationDefaults":
        return cls(
            model=settings.default_model,
            agent_name=settings.default_agent_name,
            task=settings.default_task,
            termination_token=settings.termination_token,
        )


DEFAULTS = GenerationDefaults()

BASE_IMPORTS = [
    "import asyncio",
    "from autogen_agentchat.agents import AssistantAgent",
    "from autogen_ext.models.openai import OpenAIChatCompletionClient",
]

TOOL_IMPORTS = [
    "from autogen_agentchat.base import Response",
    "from autogen_agentchat.messages import TextMessage",
]

TEAM_IMPORTS = [
    "from autogen_agentchat.teams import RoundRobinGroupChat",
    "from autogen_agentchat.conditions import TextMentionTermination",
    "from autogen_agentchat.ui import Console",
]

STRUCTURED_OUTPUT_IMPORT = "from pydantic import BaseModel"

GUIDANCE_MESSAGE = "Add Agent and Runner nodes to generate runnable code"


# ── Naming ────────────────────────────────────────────────────────────────────

def _python_name(identifier: str) -> str:
    """Make a sanitized identifier legal as a Python name: no leading digit, no keyword."""
    if identifier[:1].isdigit():
        identifier = "_" + identifier
    if keyword.iskeyword(identifier):
        identifier += "_"
    return identifier


def agent_display_name(data: AgentNodeData, defaults: GenerationDefaults = DEFAULTS) -> str:
    return data.name or defaults.agent_name


def agent_identifier(data: AgentNodeData, defaults: GenerationDefaults = DEFAULTS) -> str:
    return _python_name(sanitize_identifier(agent_display_name(data, defaults)))


def tool_function_name(data: FunctionToolNodeData, defaults: GenerationDefaults = DEFAULTS) -> str:
    """The tool's own name when it is already a usable identifier, else a sanitized one."""
    name = data.name
    if name.isidentifier() and not keyword.iskeyword(name):
        return name
    return _python_name(sanitize_identifier(name or defaults.tool_name))


# ── Sections ──────────────────────────────────────────────────────────────────

def emit_imports(workflow: Workflow) -> str:
    lines = list(BASE_IMPORTS)
    if workflow.nodes_of_kind(NodeKind.FUNCTION_TOOL):
        lines.extend(TOOL_IMPORTS)
    if len(workflow.nodes_of_kind(NodeKind.AGENT)) > 1:
        lines.extend(TEAM_IMPORTS)
    return "\n".join(lines)


def emit_structured_models(agents: List[WorkflowNode]) -> str:
    """Schema payloads of Agents with structured output, verbatim, after one BaseModel import."""
    models: List[str] = []
    for agent in agents:
        data = agent.get_typed_data()
        if data.output_type == "structured" and data.structured_schema:
            models.append(data.structured_schema)
    if not models:
        return ""
    return STRUCTURED_OUTPUT_IMPORT + "\n\n" + "\n\n".join(models)


def emit_function_tool(data: FunctionToolNodeData, defaults: GenerationDefaults = DEFAULTS) -> str:
    params = ", ".join(f"{p.name}: {p.type}" for p in data.parameters)
    return_type = data.return_type or defaults.return_type

    w = CodeWriter()
    w.writeln(f"def {tool_function_name(data, defaults)}({params}) -> {return_type}:")
    w.push()
    if data.implementation:
        w.block(data.implementation)
    else:
        w.writeln('"""Implement the tool logic here."""')
        w.writeln("pass")
    w.pop()
    return w.result()


def emit_function_tools(tools: List[WorkflowNode], defaults: GenerationDefaults = DEFAULTS) -> str:
    return "\n\n".join(emit_function_tool(t.get_typed_data(), defaults) for t in tools)


def emit_model_client(agents: List[WorkflowNode], defaults: GenerationDefaults = DEFAULTS) -> str:
    """Shared client factory; only worth emitting once there is an Agent to use it."""
    if not agents:
        return ""
    w = CodeWriter()
    w.writeln("def get_model_client() -> OpenAIChatCompletionClient:")
    w.push()
    w.writeln("return OpenAIChatCompletionClient(")
    w.push()
    w.writeln(f"model={python_string(defaults.model)},")
    w.comment('api_key="your-api-key-here",  # or set the OPENAI_API_KEY environment variable')
    w.pop()
    w.writeln(")")
    return w.result()


def emit_agent(
    data: AgentNodeData,
    tool_names: Optional[List[str]] = None,
    defaults: GenerationDefaults = DEFAULTS,
) -> str:
    w = CodeWriter()
    w.writeln(f"{agent_identifier(data, defaults)} = AssistantAgent(")
    w.push()
    w.writeln(f"name={python_string(agent_display_name(data, defaults))},")
    w.writeln("model_client=get_model_client(),")
    if data.description:
        w.writeln(f"description={python_string(data.description)},")
    if data.system_message:
        w.writeln(f"system_message={python_string(data.system_message)},")
    if tool_names:
        w.writeln(f"tools=[{', '.join(tool_names)}],")
    w.pop()
    w.writeln(")")
    return w.result()


def emit_agents(
    agents: List[WorkflowNode],
    tools: List[WorkflowNode],
    connections: Dict[str, List[str]],
    defaults: GenerationDefaults = DEFAULTS,
) -> str:
    """
    AssistantAgent declarations in node order. FunctionTools wired into an
    Agent are passed as its tools, in the order the connection index lists them.
    """
    tool_names_by_id = {t.id: tool_function_name(t.get_typed_data(), defaults) for t in tools}
    declarations: List[str] = []
    for agent in agents:
        # Parallel edges repeat a source in the index; each tool is passed once
        tool_names = list(dict.fromkeys(
            tool_names_by_id[source_id]
            for source_id in connections.get(agent.id, [])
            if source_id in tool_names_by_id
        ))
        declarations.append(emit_agent(agent.get_typed_data(), tool_names, defaults))
    return "\n\n".join(declarations)


def emit_runners(
    runners: List[WorkflowNode],
    agents: List[WorkflowNode],
    connections: Dict[str, List[str]],
) -> str:
    """Reserved section. Runner behaviour is expressed entirely by the entry point."""
    return ""


def _single_agent_main(agent_var: str, task: str, use_async: bool) -> str:
    w = CodeWriter()
    w.writeln("async def main() -> None:" if use_async else "def main() -> None:")
    w.push()
    w.writeln("model_client = get_model_client()")
    w.writeln("try:")
    w.push()
    if use_async:
        w.writeln(f"result = await {agent_var}.run(task={python_string(task)})")
    else:
        w.writeln(f"result = {agent_var}.run_sync(task={python_string(task)})")
    w.writeln("print(result)")
    w.pop()
    w.writeln("finally:")
    w.push()
    w.writeln("await model_client.close()" if use_async else "model_client.close()")
    w.pop()
    w.pop()
    w.blank()
    w.writeln('if __name__ == "__main__":')
    w.push()
    w.writeln("asyncio.run(main())" if use_async else "main()")
    return w.result()


def _team_main(agent_vars: List[str], task: str, termination_token: str) -> str:
    w = CodeWriter()
    w.writeln("async def main() -> None:")
    w.push()
    w.writeln("model_client = get_model_client()")
    w.blank()
    w.comment("Stop once any agent mentions the termination token")
    w.writeln(f"termination = TextMentionTermination({python_string(termination_token)})")
    w.blank()
    w.comment("Agents take turns in node order")
    w.writeln("team = RoundRobinGroupChat(")
    w.push()
    w.writeln(f"[{', '.join(agent_vars)}],")
    w.writeln("termination_condition=termination")
    w.pop()
    w.writeln(")")
    w.blank()
    w.writeln("try:")
    w.push()
    w.writeln(f"await Console(team.run_stream(task={python_string(task)}))")
    w.pop()
    w.writeln("finally:")
    w.push()
    w.writeln("await model_client.close()")
    w.pop()
    w.pop()
    w.blank()
    w.writeln('if __name__ == "__main__":')
    w.push()
    w.writeln("asyncio.run(main())")
    return w.result()


def emit_entry_point(
    runners: List[WorkflowNode],
    agents: List[WorkflowNode],
    defaults: GenerationDefaults = DEFAULTS,
) -> str:
    """
    main() for the workflow's shape:

      no Runner or no Agent  print guidance only
      one Agent              run the agent; async iff any Runner is async
      several Agents         always async round-robin team streamed to the console

    Only the first Runner's task is used.
    """
    if not runners or not agents:
        w = CodeWriter()
        w.writeln('if __name__ == "__main__":')
        w.push()
        w.writeln(f"print({python_string(GUIDANCE_MESSAGE)})")
        return w.result()

    runner_data: List[RunnerNodeData] = [r.get_typed_data() for r in runners]
    task = runner_data[0].input or defaults.task

    if len(agents) == 1:
        use_async = any(r.execution_mode == "async" for r in runner_data)
        return _single_agent_main(agent_identifier(agents[0].get_typed_data(), defaults), task, use_async)

    agent_vars = [agent_identifier(a.get_typed_data(), defaults) for a in agents]
    return _team_main(agent_vars, task, defaults.termination_token)
