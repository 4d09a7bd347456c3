from __future__ import annotations

import asyncio

import pytest

from llm_workflows.api import cli, demos
from llm_workflows.errors import CompletionError
from llm_workflows.llm import service
from tests.fakes import FunctionLLM


def test_parser_requires_a_subcommand() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_loop_timeout_option() -> None:
    args = cli.build_parser().parse_args(["loop", "--timeout", "2.5"])
    assert args.command == "loop"
    assert args.timeout == 2.5


def test_chain_demo_prints_final_result(scripted_llm, capsys) -> None:
    steps = len(demos.DATA_PROCESSING_STEPS)
    scripted_llm([f"output {n}" for n in range(1, steps + 1)])

    assert cli.main(["chain"]) == 0

    out = capsys.readouterr().out
    assert "Formatted Result:" in out
    assert f"output {steps}" in out


def test_parallel_demo_prints_one_section_per_stakeholder(monkeypatch, capsys) -> None:
    monkeypatch.setattr(service, "llm_call", FunctionLLM(lambda prompt: "impact"))

    assert cli.main(["parallel"]) == 0

    out = capsys.readouterr().out
    assert out.count("--- Analysis for Stakeholder Group") == len(demos.STAKEHOLDERS)


def test_route_demo_reports_failing_ticket_and_continues(monkeypatch, capsys) -> None:
    def respond(prompt: str) -> str:
        if "<selection>" in prompt:
            if "export" in prompt:
                return "<selection>shipping</selection>"
            return "<selection>account</selection>"
        return "handled"

    monkeypatch.setattr(service, "llm_call", FunctionLLM(respond))

    assert cli.main(["route"]) == 1

    captured = capsys.readouterr()
    assert captured.out.count("handled") == len(demos.TICKETS) - 1
    assert "Error processing ticket 3" in captured.err


def test_workflow_failure_exits_with_status_one(scripted_llm, capsys) -> None:
    scripted_llm([CompletionError("GEMINI KEY FILE NOT FOUND")])

    assert cli.main(["chain"]) == 1
    assert "Error: GEMINI KEY FILE NOT FOUND" in capsys.readouterr().err


def test_orchestrate_demo(monkeypatch, capsys) -> None:
    def respond(prompt: str) -> str:
        if "<tasks>" in prompt:
            return (
                "<analysis>split by tone</analysis><tasks>"
                "<task><type>formal</type><description>precise</description></task>"
                "</tasks>"
            )
        return "<response>worker copy</response>"

    monkeypatch.setattr(service, "llm_call", FunctionLLM(respond))

    assert cli.main(["orchestrate"]) == 0

    out = capsys.readouterr().out
    assert "split by tone" in out
    assert "--- Worker 1 (formal) ---" in out
    assert "worker copy" in out


def test_loop_demo_prints_final_result_and_history(monkeypatch, capsys) -> None:
    evaluations = 0

    def respond(prompt: str) -> str:
        nonlocal evaluations
        if "Content to evaluate:" in prompt:
            evaluations += 1
            verdict = "PASS" if evaluations == 2 else "NEEDS_IMPROVEMENT"
            return f"<evaluation>{verdict}</evaluation><feedback>use two stacks</feedback>"
        attempt = evaluations + 1
        return f"<thoughts>idea {attempt}</thoughts><response>stack v{attempt}</response>"

    monkeypatch.setattr(service, "llm_call", FunctionLLM(respond))

    assert cli.main(["loop"]) == 0

    out = capsys.readouterr().out
    assert "Loop finished successfully!" in out
    assert "=== Final Result ===\nstack v2" in out
    assert "--- Attempt 1 ---" in out
    assert "--- Attempt 2 ---" in out
    assert "--- Attempt 3 ---" not in out


def test_loop_demo_timeout_exits_with_status_one(monkeypatch, capsys) -> None:
    async def respond(prompt: str) -> str:
        await asyncio.sleep(0.01)
        if "Content to evaluate:" in prompt:
            return "<evaluation>NEEDS_IMPROVEMENT</evaluation>"
        return "<response>draft</response>"

    monkeypatch.setattr(service, "llm_call", FunctionLLM(respond))

    assert cli.main(["loop", "--timeout", "0.1"]) == 1
    assert "Error: refinement loop timed out" in capsys.readouterr().err
