"""Orchestrator-worker pattern: decompose a task, run subtasks concurrently.

Control-flow model:
    1. Render the orchestrator template (`task` + context).
    2. One decomposition call; extract `<analysis>` and `<tasks>`.
    3. Parse `<task><type/><description/></task>` groups in order; malformed
       groups are skipped.
    4. Render every worker prompt, then issue all worker calls concurrently and
       extract `<response>` from each.
    5. Return the analysis plus one `WorkerResult` per subtask, in subtask order.

Validation:
    Template placeholders are checked before the corresponding model call. A
    missing variable in the worker template is detected before any worker runs.
    Passing `context_keys` at construction validates both templates up front.

Failure handling:
    Fail-fast aggregate. The first worker failure propagates; other workers run
    to completion and their results are discarded.
"""

import asyncio
import logging
from typing import Any, Iterable, Mapping

from llm_workflows.core.types import CompletionClient, OrchestratorOutput, SubTask, WorkerResult
from llm_workflows.core.workflows import resolve_client
from llm_workflows.nlp.tag_parser import extract_tag, parse_subtasks
from llm_workflows.prompting.templates import OrchestratorFields, PromptTemplate, WorkerFields


logger = logging.getLogger(__name__)


class TaskOrchestrator:
    """Break a task into subtasks with one LLM call, then run workers in parallel."""

    def __init__(
        self,
        orchestrator_prompt: str,
        worker_prompt: str,
        *,
        llm: CompletionClient | None = None,
        context_keys: Iterable[str] | None = None,
    ) -> None:
        """Initialize with prompt templates.

        Args:
            orchestrator_prompt: Decomposition template; may use `{task}` and
                context placeholders.
            worker_prompt: Worker template; may use `{original_task}`,
                `{task_type}`, `{task_description}` and context placeholders.
            llm: Optional completion client.
            context_keys: Context field names every `process` call will supply.
                When given, both templates are validated immediately.

        Raises:
            MissingTemplateVariableError: a template needs a field outside
                `context_keys` and the built-in names.
        """
        self.orchestrator_template = PromptTemplate(orchestrator_prompt)
        self.worker_template = PromptTemplate(worker_prompt)
        self.llm = llm

        if context_keys is not None:
            keys = frozenset(context_keys)
            self.orchestrator_template.require(OrchestratorFields.KEYS | keys)
            self.worker_template.require(WorkerFields.KEYS | keys)

    async def process(self, task: str, context: Mapping[str, Any] | None = None) -> OrchestratorOutput:
        """Decompose `task` and run one worker per declared subtask.

        Returns:
            `OrchestratorOutput` with the analysis and ordered worker results.

        Raises:
            MissingTemplateVariableError: a placeholder has no value.
            CompletionError: the decomposition call or any worker call failed.
        """
        client = resolve_client(self.llm)
        effective_context = dict(context or {})

        orchestrator_input = self.orchestrator_template.render(
            OrchestratorFields(task=task, context=effective_context).as_values()
        )
        orchestrator_response = await client(orchestrator_input)

        analysis = extract_tag(orchestrator_response, "analysis")
        tasks_block = extract_tag(orchestrator_response, "tasks")
        logger.debug("Raw tasks block:\n%s", tasks_block)

        subtasks = parse_subtasks(tasks_block)

        logger.info("Orchestrator analysis:\n%s", analysis)
        logger.info(
            "Orchestrator subtasks: %s",
            ", ".join(subtask.type for subtask in subtasks) or "none",
        )

        worker_inputs = [
            self.worker_template.render(
                WorkerFields(
                    original_task=task,
                    task_type=subtask.type,
                    task_description=subtask.description,
                    context=effective_context,
                ).as_values()
            )
            for subtask in subtasks
        ]

        worker_results = await asyncio.gather(*(
            self._run_worker(client, subtask, worker_input)
            for subtask, worker_input in zip(subtasks, worker_inputs)
        ))

        return OrchestratorOutput(analysis=analysis, worker_results=tuple(worker_results))

    async def _run_worker(self, client: CompletionClient, subtask: SubTask, worker_input: str) -> WorkerResult:
        worker_response = await client(worker_input)
        result = extract_tag(worker_response, "response")

        logger.info("Worker result (%s):\n%s", subtask.type, result)

        return WorkerResult(type=subtask.type, description=subtask.description, result=result)
