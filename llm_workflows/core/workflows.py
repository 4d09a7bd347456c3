"""Basic workflow patterns: sequential chain, concurrent fan-out, routing.

Control-flow model:
    - `chain`: strictly sequential; step N+1 sees step N's output.
    - `parallel`: one independent call per input, all issued at once, results
      index-aligned with inputs.
    - `route`: one classification call, then one call to the selected
      specialized prompt.

Completion client:
    Every function takes an optional `llm` (see `CompletionClient`). `None`
    resolves to `llm_workflows.llm.service.llm_call` at call time.

Error handling strategy:
    Nothing is retried or swallowed. Transport failures propagate unchanged;
    `route` raises `UnknownRouteError` when the selection is not a table key.
    `parallel` is fail-fast: the first failure propagates while sibling calls
    run to completion and their outcomes are discarded.
"""

import asyncio
import logging
from typing import Mapping, Sequence

from llm_workflows.core.types import CompletionClient
from llm_workflows.errors import UnknownRouteError
from llm_workflows.llm import service
from llm_workflows.nlp.intent_router import select_route
from llm_workflows.prompting.prompt_builder import build_step_prompt


logger = logging.getLogger(__name__)


def resolve_client(llm: CompletionClient | None) -> CompletionClient:
    """Return `llm`, or the configured provider client when it is `None`."""
    return llm if llm is not None else service.llm_call


async def chain(value: str, prompts: Sequence[str], *, llm: CompletionClient | None = None) -> str:
    """Run `prompts` in order, threading each output into the next step.

    Returns:
        Output of the last step, or `value` unchanged when `prompts` is empty.
    """
    client = resolve_client(llm)
    result = value

    for index, prompt in enumerate(prompts, start=1):
        result = await client(build_step_prompt(prompt, result))
        logger.info("Step %d/%d:\n%s", index, len(prompts), result)

    return result


async def parallel(prompt: str, inputs: Sequence[str], *, llm: CompletionClient | None = None) -> list[str]:
    """Apply one prompt to every input concurrently.

    Returns:
        `results[i]` for `inputs[i]`, regardless of completion order.
    """
    client = resolve_client(llm)

    if not inputs:
        return []

    logger.info("Fan-out: %d concurrent call(s)", len(inputs))
    calls = [client(build_step_prompt(prompt, item)) for item in inputs]
    results = await asyncio.gather(*calls)
    return list(results)


async def route(value: str, routes: Mapping[str, str], *, llm: CompletionClient | None = None) -> str:
    """Classify `value` into one route and run that route's prompt.

    Raises:
        UnknownRouteError: selection is empty or not a key of `routes`.
    """
    client = resolve_client(llm)

    decision = await select_route(value, routes.keys(), client)

    selected_prompt = routes.get(decision.route_key) if decision.route_key else None
    if selected_prompt is None:
        logger.error("Route key %r not found in provided routes", decision.route_key)
        raise UnknownRouteError(decision.route_key, decision.available_routes)

    return await client(build_step_prompt(selected_prompt, value))
