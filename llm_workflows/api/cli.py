"""
Command-line demo runner for the workflow patterns.

Architectural role:
- Provides a terminal interface over the `core` workflow patterns.
- Runs one demonstration per pattern with the prompts from `api.demos`.
- Delegates all control flow to `core`; this module only parses arguments,
  configures logging and renders results.

Subcommands:
- `chain`:       structured data extraction chain over a quarterly report.
- `parallel`:    stakeholder impact analysis fan-out.
- `route`:       support ticket routing (one route call per ticket).
- `loop`:        min-stack generate/evaluate refinement (`--timeout` optional).
- `orchestrate`: product description decomposition with parallel workers.

Error handling strategy:
- `WorkflowError` (including `CompletionError`) and loop timeouts print
  `Error: ...` to stderr and exit with status 1.
- In `route`, a failing ticket is reported and the remaining tickets still run.

Side effects:
- Loads `.env` at import time via `load_dotenv()`.
- Performs provider calls and writes results to stdout.
"""

from dotenv import load_dotenv

load_dotenv()

import argparse
import asyncio
import logging
import os
import sys

from llm_workflows.api import demos
from llm_workflows.core.orchestrator import TaskOrchestrator
from llm_workflows.core.refinement import loop
from llm_workflows.core.workflows import chain, parallel, route
from llm_workflows.errors import WorkflowError


logger = logging.getLogger(__name__)

SEPARATOR = "-" * 60


# =========================================================
# UTF-8 SAFE OUTPUT
# Best-effort stdout encoding normalization for interactive terminals.
# =========================================================

if hasattr(sys.stdout, "reconfigure"):
    try:
        sys.stdout.reconfigure(encoding="utf-8", errors="ignore")
    except (AttributeError, ValueError, OSError):
        pass


# =========================================================
# DEMOS
# =========================================================

async def run_chain_demo() -> None:
    """Transform the demo report into a markdown table, step by step."""
    print("Input text:")
    print(demos.REPORT)

    print("Processing steps:")
    for index, step in enumerate(demos.DATA_PROCESSING_STEPS, start=1):
        print(f"Step {index}:\n{step}\n")

    print("Executing chain...\n")
    result = await chain(demos.REPORT, demos.DATA_PROCESSING_STEPS)

    print("Formatted Result:")
    print(result)


async def run_parallel_demo() -> None:
    """Analyze every stakeholder group concurrently."""
    print("Starting parallel stakeholder impact analysis...")
    results = await parallel(demos.IMPACT_ANALYSIS_PROMPT, demos.STAKEHOLDERS)

    print("\n--- Stakeholder Impact Analysis Results ---")
    for index, result in enumerate(results, start=1):
        print(f"\n--- Analysis for Stakeholder Group {index} ---")
        print(result)
        print(SEPARATOR)


async def run_route_demo() -> int:
    """Route each demo ticket; returns the number of failed tickets."""
    print("Processing support tickets...\n")
    failures = 0

    for index, ticket in enumerate(demos.TICKETS, start=1):
        print(f"\nTicket {index}:")
        print(SEPARATOR)
        print(ticket)
        print("\nResponse:")
        print(SEPARATOR)

        try:
            response = await route(ticket, demos.SUPPORT_ROUTES)
        except WorkflowError as e:
            failures += 1
            print(f"Error processing ticket {index}: {e}", file=sys.stderr)
            continue

        print(response)

    return failures


async def run_loop_demo(timeout: float | None = None) -> None:
    """Refine the min-stack implementation until the evaluator passes it."""
    print("Starting the optimization loop...")
    work = loop(demos.MIN_STACK_TASK, demos.EVALUATOR_PROMPT, demos.GENERATOR_PROMPT)
    final_result, history = await asyncio.wait_for(work, timeout)

    print("\nLoop finished successfully!")
    print("\n=== Final Result ===")
    print(final_result)

    print("\n=== Chain of Thought History ===")
    for index, item in enumerate(history, start=1):
        print(f"\n--- Attempt {index} ---")
        print(f"Thoughts:\n{item.thoughts}")
        print(f"Result:\n{item.result}")


async def run_orchestrate_demo() -> None:
    """Decompose the product-description task and run the workers."""
    print("Starting orchestration process...")
    orchestrator = TaskOrchestrator(
        demos.ORCHESTRATOR_PROMPT,
        demos.WORKER_PROMPT,
        context_keys=demos.PRODUCT_CONTEXT.keys(),
    )
    output = await orchestrator.process(demos.PRODUCT_TASK, demos.PRODUCT_CONTEXT)

    print("\n=== FINAL ORCHESTRATION RESULTS ===")
    print(f"\nOrchestrator Analysis:\n{output.analysis}")

    print("\nWorker Results:")
    for index, worker_result in enumerate(output.worker_results, start=1):
        print(f"\n--- Worker {index} ({worker_result.type}) ---")
        print(f"Description: {worker_result.description}")
        print(f"Result:\n{worker_result.result}")

    print("\nOrchestration process completed.")


# =========================================================
# MAIN
# =========================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="llm-workflows",
        description="Run a demonstration of one LLM workflow pattern.",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="Logging level for workflow diagnostics (default: INFO).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("chain", help="Sequential prompt chain demo.")
    subparsers.add_parser("parallel", help="Concurrent fan-out demo.")
    subparsers.add_parser("route", help="Content-based routing demo.")
    loop_parser = subparsers.add_parser("loop", help="Generate/evaluate refinement demo.")
    loop_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Abort the loop after this many seconds (default: unbounded).",
    )
    subparsers.add_parser("orchestrate", help="Orchestrator-worker demo.")

    return parser


def main(argv=None) -> int:
    """
    Parse arguments, configure logging and run the selected demo.

    Returns:
        Process exit status: 0 on success, 1 on any workflow failure.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=str(args.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "chain":
        work = run_chain_demo()
    elif args.command == "parallel":
        work = run_parallel_demo()
    elif args.command == "route":
        work = run_route_demo()
    elif args.command == "loop":
        work = run_loop_demo(args.timeout)
    else:
        work = run_orchestrate_demo()

    try:
        outcome = asyncio.run(work)
    except asyncio.TimeoutError:
        print("Error: refinement loop timed out", file=sys.stderr)
        return 1
    except WorkflowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\n" + SEPARATOR + "\n")

    if args.command == "route" and outcome:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
