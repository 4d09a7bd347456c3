"""Explicit orchestration patterns around LLM text-completion calls.

Package map:
    - `llm`: completion client (provider config, payload service, HTTP transport).
    - `nlp`: tag-delimited output parsing and LLM-driven route selection.
    - `prompting`: prompt assembly and `{placeholder}` templates.
    - `core`: chain, parallel, route, generate/evaluate loop, task orchestrator.
    - `api`: CLI demo runner and HTTP adapter.
    - `errors`: shared error taxonomy.
"""

from llm_workflows.core.orchestrator import TaskOrchestrator
from llm_workflows.core.refinement import evaluate, generate, loop
from llm_workflows.core.types import (
    ChainOfThoughtItem,
    CompletionClient,
    OrchestratorOutput,
    SubTask,
    WorkerResult,
)
from llm_workflows.core.workflows import chain, parallel, route
from llm_workflows.errors import (
    CompletionError,
    LoopCancelledError,
    MissingTemplateVariableError,
    UnknownRouteError,
    WorkflowError,
)
from llm_workflows.nlp.tag_parser import extract_tag
from llm_workflows.prompting.templates import format_prompt

__all__ = [
    "ChainOfThoughtItem",
    "CompletionClient",
    "CompletionError",
    "LoopCancelledError",
    "MissingTemplateVariableError",
    "OrchestratorOutput",
    "SubTask",
    "TaskOrchestrator",
    "UnknownRouteError",
    "WorkerResult",
    "WorkflowError",
    "chain",
    "evaluate",
    "extract_tag",
    "format_prompt",
    "generate",
    "loop",
    "parallel",
    "route",
]
