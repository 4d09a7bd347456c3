"""Prompt-to-payload adapter for LLM invocation.

Architectural role:
    Provides the canonical text-generation entrypoint used by the workflow
    patterns. This module bridges prompt text (built by `prompting` and `core`)
    to transport (`llm_workflows.llm.client`).

Model call flow:
    prompt -> payload construction -> `client.send_request(...)`.
    `llm_call` runs the blocking transport in a worker thread so concurrent
    workflow steps share one event loop.

Token behavior:
    No token-budget enforcement is implemented here. `max_tokens` is forwarded
    from configuration and applied by provider mapping in `client`.

Determinism:
    Payload construction is deterministic for fixed inputs and configuration.
    Generated output remains non-deterministic because inference runs remotely.
"""

import asyncio
import logging
from dataclasses import dataclass

from llm_workflows.llm.provider_config import SYSTEM_MESSAGE, MODEL_NAME, MAX_TOKENS
from llm_workflows.llm.client import send_request


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionRequest:
    """One immutable completion call.

    Attributes:
        prompt: User prompt text.
        system_prompt: Optional system instruction; empty means configured default.
        model_name: Model identifier; `None` means configured `MODEL_NAME`.
    """

    prompt: str
    system_prompt: str = ""
    model_name: str | None = None


def build_payload(request: CompletionRequest) -> dict:
    """Build the provider-agnostic chat payload for one request.

    The system message is included only when an instruction is available.
    """
    system_prompt = request.system_prompt or SYSTEM_MESSAGE

    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": request.prompt})

    return {
        "model": request.model_name or MODEL_NAME,
        "messages": messages,
        "max_tokens": MAX_TOKENS,
    }


def complete(request: CompletionRequest) -> str:
    """Run one completion request synchronously.

    Raises:
        CompletionError: propagated from `client.send_request`.
    """
    payload = build_payload(request)
    logger.debug("Completion request: model=%s prompt_chars=%d", payload["model"], len(request.prompt))
    return send_request(payload)


def generate_answer(prompt: str, system_prompt: str = "", model_name: str | None = None) -> str:
    """Invoke the configured model for one prompt.

    Args:
        prompt: Fully constructed user prompt.
        system_prompt: Optional system instruction.
        model_name: Optional model override.

    Returns:
        Generated text.

    Failure scenarios:
        Transport/provider failures raise `CompletionError`; nothing is retried.
    """
    return complete(CompletionRequest(prompt, system_prompt, model_name))


async def llm_call(prompt: str, system_prompt: str = "", model_name: str | None = None) -> str:
    """Async completion client used by the workflow patterns.

    Runs the blocking HTTP call in a thread via `asyncio.to_thread`, which is
    the only suspension point of every workflow.
    """
    return await asyncio.to_thread(generate_answer, prompt, system_prompt, model_name)
