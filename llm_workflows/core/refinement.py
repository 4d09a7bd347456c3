"""Generate/evaluate refinement loop.

Control-flow model:
    generate (no context) -> record -> [evaluate -> PASS? return
                                        : build context -> generate -> record]*

    Phases are strictly sequential. Each phase is one completion call, which is
    the loop's only suspension point.

Termination:
    Only an evaluation equal to "PASS" (case-insensitive, exact) ends the loop.
    "NEEDS_IMPROVEMENT", "FAIL", empty, malformed or anything else continues it.
    There is no attempt limit and no timeout. Callers bound the loop themselves:
    set `cancel_event` (checked before every phase) or wrap the call in
    `asyncio.wait_for`.

History:
    One `ChainOfThoughtItem` per generation attempt, in order, never truncated or
    deduplicated. Regeneration context lists every earlier candidate plus the
    latest feedback.
"""

import asyncio
import logging

from llm_workflows.core.types import (
    ChainOfThoughtItem,
    CompletionClient,
    EvaluationOutcome,
    LoopResult,
    Verdict,
)
from llm_workflows.core.workflows import resolve_client
from llm_workflows.errors import LoopCancelledError
from llm_workflows.nlp.tag_parser import extract_tag
from llm_workflows.prompting.prompt_builder import (
    build_evaluation_prompt,
    build_generation_prompt,
    build_refinement_context,
)


logger = logging.getLogger(__name__)


async def generate(
    prompt: str,
    task: str,
    context: str = "",
    *,
    llm: CompletionClient | None = None,
) -> tuple[str, str]:
    """Produce one candidate.

    Returns:
        `(thoughts, result)` from the `<thoughts>` and `<response>` tags. Either
        may be empty when the model omits the tag.
    """
    client = resolve_client(llm)

    response = await client(build_generation_prompt(prompt, task, context))
    thoughts = extract_tag(response, "thoughts")
    result = extract_tag(response, "response")

    logger.info("Generation thoughts:\n%s", thoughts)
    logger.info("Generated:\n%s", result)

    return thoughts, result


async def evaluate(
    prompt: str,
    content: str,
    task: str,
    *,
    llm: CompletionClient | None = None,
) -> EvaluationOutcome:
    """Judge one candidate against the task.

    Returns:
        `EvaluationOutcome` built from the `<evaluation>` and `<feedback>` tags.
    """
    client = resolve_client(llm)

    response = await client(build_evaluation_prompt(prompt, content, task))
    raw = extract_tag(response, "evaluation")
    feedback = extract_tag(response, "feedback")

    logger.info("Evaluation status: %s", raw)
    logger.info("Evaluation feedback: %s", feedback)

    return EvaluationOutcome(verdict=Verdict.from_text(raw), raw=raw, feedback=feedback)


def _check_cancelled(cancel_event: asyncio.Event | None, history: list[ChainOfThoughtItem]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        logger.warning("Refinement loop cancelled after %d attempt(s)", len(history))
        raise LoopCancelledError(history)


async def loop(
    task: str,
    evaluator_prompt: str,
    generator_prompt: str,
    *,
    llm: CompletionClient | None = None,
    cancel_event: asyncio.Event | None = None,
) -> LoopResult:
    """Generate and evaluate until the evaluator returns PASS.

    Args:
        task: Task text passed to both generator and evaluator.
        evaluator_prompt: Evaluation criteria prompt.
        generator_prompt: Generation instruction prompt.
        llm: Optional completion client.
        cancel_event: Optional caller-owned signal, checked before each phase.

    Returns:
        `LoopResult(result, history)`; unpacks as a 2-tuple.

    Raises:
        LoopCancelledError: `cancel_event` was set; carries the history so far.
    """
    client = resolve_client(llm)
    history: list[ChainOfThoughtItem] = []

    _check_cancelled(cancel_event, history)
    thoughts, result = await generate(generator_prompt, task, llm=client)
    history.append(ChainOfThoughtItem(thoughts=thoughts, result=result))

    while True:
        _check_cancelled(cancel_event, history)
        outcome = await evaluate(evaluator_prompt, result, task, llm=client)

        if outcome.passed:
            logger.info("Loop finished: PASS after %d attempt(s)", len(history))
            return LoopResult(result=result, history=history)

        logger.info("Loop continues: %s", outcome.verdict.value)

        context = build_refinement_context([item.result for item in history], outcome.feedback)

        _check_cancelled(cancel_event, history)
        thoughts, result = await generate(generator_prompt, task, context, llm=client)
        history.append(ChainOfThoughtItem(thoughts=thoughts, result=result))
