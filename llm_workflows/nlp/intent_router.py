"""LLM-driven route selection producing `RoutingDecision`.

Intent classification logic:
- Lists every route-table key in a selector prompt.
- Asks the model for a `<reasoning>` block and a `<selection>` block.
- Normalizes the selection (trim + lowercase) into a route key.

Interaction with core:
- Returns `RoutingDecision` consumed by `llm_workflows.core.workflows.route`,
  which validates the key against the route table and dispatches.

Determinism:
- Prompt construction and normalization are deterministic.
- The selection itself is model-dependent.

Failure handling:
- Missing or empty tags yield an empty route key; no fallback route is guessed
  here. Transport failures propagate unchanged.
"""

import logging
from typing import Iterable

from llm_workflows.core.types import CompletionClient, RoutingDecision
from llm_workflows.nlp.tag_parser import extract_tag
from llm_workflows.prompting.prompt_builder import build_route_selector_prompt


logger = logging.getLogger(__name__)


def normalize_route_key(selection: str) -> str:
    """Normalize a raw `<selection>` value into a route-table key."""
    return (selection or "").strip().lower()


async def select_route(value: str, route_keys: Iterable[str], llm: CompletionClient) -> RoutingDecision:
    """
    Ask the model which route fits `value`.

    Parsing rules:
    1. `reasoning` is informational only.
    2. `selection` is trimmed and lowercased.

    Edge cases:
    - Empty or absent `<selection>` -> empty `route_key`.
    - Extra prose inside `<selection>` is kept and fails the later lookup.
    """
    keys = tuple(route_keys)
    logger.info("Available routes: %s", ", ".join(keys))

    response = await llm(build_route_selector_prompt(value, keys))

    reasoning = extract_tag(response, "reasoning")
    route_key = normalize_route_key(extract_tag(response, "selection"))

    logger.info("Routing analysis: %s", reasoning or "No reasoning provided.")
    logger.info("Selected route: %s", route_key)

    return RoutingDecision(route_key=route_key, reasoning=reasoning, available_routes=keys)
