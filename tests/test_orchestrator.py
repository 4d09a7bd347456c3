from __future__ import annotations

import asyncio

import pytest

from llm_workflows.core.orchestrator import TaskOrchestrator
from llm_workflows.core.types import WorkerResult
from llm_workflows.errors import CompletionError, MissingTemplateVariableError
from tests.fakes import FunctionLLM, ScriptedLLM


ORCHESTRATOR = "Analyze: {task}\nAudience: {audience}"
WORKER = "Task: {original_task}\nStyle: {task_type}\nGuidelines: {task_description}\nAudience: {audience}"

DECOMPOSITION = """
<analysis>Two styles serve this audience.</analysis>
<tasks>
    <task>
    <type>formal</type>
    <description>Precise and technical.</description>
    </task>
    <task>
    <type>incomplete</type>
    </task>
    <task>
    <type>conversational</type>
    <description>Friendly and engaging.</description>
    </task>
</tasks>
"""


def _worker_reply(prompt: str) -> str:
    style = prompt.split("Style: ", 1)[1].split("\n", 1)[0]
    return f"<response>{style} copy</response>"


def _respond(prompt: str) -> str:
    if prompt.startswith("Analyze:"):
        return DECOMPOSITION
    return _worker_reply(prompt)


def test_process_runs_one_worker_per_valid_subtask_in_order() -> None:
    llm = FunctionLLM(_respond)
    orchestrator = TaskOrchestrator(ORCHESTRATOR, WORKER, llm=llm)

    output = asyncio.run(orchestrator.process("Describe the bottle", {"audience": "hikers"}))

    assert output.analysis == "Two styles serve this audience."
    assert output.worker_results == (
        WorkerResult(type="formal", description="Precise and technical.", result="formal copy"),
        WorkerResult(type="conversational", description="Friendly and engaging.", result="conversational copy"),
    )
    assert llm.prompts[0] == "Analyze: Describe the bottle\nAudience: hikers"
    assert sorted(llm.prompts[1:]) == sorted([
        "Task: Describe the bottle\nStyle: formal\nGuidelines: Precise and technical.\nAudience: hikers",
        "Task: Describe the bottle\nStyle: conversational\nGuidelines: Friendly and engaging.\nAudience: hikers",
    ])


def test_missing_orchestrator_variable_fails_before_any_call() -> None:
    llm = ScriptedLLM()
    orchestrator = TaskOrchestrator(ORCHESTRATOR, WORKER, llm=llm)

    with pytest.raises(MissingTemplateVariableError) as excinfo:
        asyncio.run(orchestrator.process("Describe the bottle"))

    assert excinfo.value.missing == ("audience",)
    assert llm.prompts == []


def test_missing_worker_variable_fails_before_any_worker_call() -> None:
    llm = ScriptedLLM([DECOMPOSITION])
    orchestrator = TaskOrchestrator("Analyze: {task}", WORKER, llm=llm)

    with pytest.raises(MissingTemplateVariableError):
        asyncio.run(orchestrator.process("Describe the bottle"))

    assert len(llm.prompts) == 1


def test_context_keys_validate_templates_at_construction() -> None:
    TaskOrchestrator(ORCHESTRATOR, WORKER, llm=ScriptedLLM(), context_keys=["audience"])

    with pytest.raises(MissingTemplateVariableError) as excinfo:
        TaskOrchestrator(ORCHESTRATOR, WORKER, llm=ScriptedLLM(), context_keys=[])
    assert excinfo.value.missing == ("audience",)


def test_no_declared_subtasks_yields_empty_results() -> None:
    llm = ScriptedLLM(["<analysis>Nothing to split.</analysis>"])
    orchestrator = TaskOrchestrator("Analyze: {task}", "{task_type}", llm=llm)

    output = asyncio.run(orchestrator.process("Describe the bottle"))

    assert output.analysis == "Nothing to split."
    assert output.worker_results == ()
    assert len(llm.prompts) == 1


def test_worker_failure_fails_the_whole_process() -> None:
    def respond(prompt: str) -> str:
        if prompt.startswith("Analyze:"):
            return DECOMPOSITION
        if "conversational" in prompt:
            raise CompletionError("GEMINI HTTP ERROR (503)", status_code=503)
        return _worker_reply(prompt)

    orchestrator = TaskOrchestrator(ORCHESTRATOR, WORKER, llm=FunctionLLM(respond))

    with pytest.raises(CompletionError):
        asyncio.run(orchestrator.process("Describe the bottle", {"audience": "hikers"}))


def test_worker_without_response_tag_gets_empty_result() -> None:
    def respond(prompt: str) -> str:
        if prompt.startswith("Analyze:"):
            return DECOMPOSITION
        return "free-form text"

    orchestrator = TaskOrchestrator(ORCHESTRATOR, WORKER, llm=FunctionLLM(respond))
    output = asyncio.run(orchestrator.process("Describe the bottle", {"audience": "hikers"}))

    assert [item.result for item in output.worker_results] == ["", ""]


def test_uses_default_client(scripted_llm) -> None:
    llm = scripted_llm([
        "<analysis>a</analysis><tasks><task><type>t</type><description>d</description></task></tasks>",
        "<response>done</response>",
    ])
    output = asyncio.run(TaskOrchestrator("{task}", "{task_type}: {task_description}").process("x"))

    assert output.worker_results[0].result == "done"
    assert llm.prompts == ["x", "t: d"]


def test_hyphenated_context_keys_reach_every_prompt() -> None:
    llm = ScriptedLLM([
        "<analysis>a</analysis><tasks><task><type>t</type><description>d</description></task></tasks>",
        "<response>done</response>",
    ])
    orchestrator = TaskOrchestrator(
        "Task: {task}\nAudience: {target-audience}",
        "{task_type} for {target-audience}",
        llm=llm,
        context_keys=["target-audience"],
    )

    asyncio.run(orchestrator.process("x", {"target-audience": "hikers"}))

    assert llm.prompts == ["Task: x\nAudience: hikers", "t for hikers"]
