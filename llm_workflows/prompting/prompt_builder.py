"""Prompt assembly helpers used by the workflow patterns.

This module is intentionally narrow: it only builds prompt strings from
caller-supplied prompts and intermediate results. Route selection, tag parsing,
template validation and model invocation happen outside this module.

Design constraints:
    - Deterministic construction for identical inputs.
    - Fixed ordering of prompt components per pattern.
    - No hidden side effects (no I/O, no global state mutation).

Prompt safety model:
    - User text and intermediate model output are interpolated as raw strings.
    - Any tag a workflow extracts must be requested literally in the prompt text
      (the selector prompt below requests `<reasoning>` and `<selection>`).
"""

from typing import Iterable, Sequence


# =========================================================
# STEP PROMPT (chain, parallel, routed dispatch)
# =========================================================
# Prompt component order:
#   1) caller prompt
#   2) "Input:" line carrying the current value

def build_step_prompt(prompt: str, value: str) -> str:
    """Append one input value to a caller prompt."""
    return f"{prompt}\nInput: {value}"


# =========================================================
# ROUTE SELECTOR PROMPT
# =========================================================
# Prompt component order:
#   1) selection instruction listing every route key
#   2) requested output format (`<reasoning>`, `<selection>`)
#   3) input under classification

def build_route_selector_prompt(value: str, route_keys: Iterable[str]) -> str:
    """Build the classification prompt for the router.

    Edge cases:
        - An empty key list still produces a prompt; the router rejects whatever
          the model selects.
        - Leading/trailing whitespace of the whole prompt is stripped.
    """
    options = ", ".join(route_keys)

    return (
        "Analyze the input and select the most appropriate support team from "
        f"these options: {options}\n"
        "First explain your reasoning, then provide your selection in this XML format:\n\n"
        "<reasoning>\n"
        "Brief explanation of why this ticket should be routed to a specific team.\n"
        "Consider key terms, user intent, and urgency level.\n"
        "</reasoning>\n\n"
        "<selection>\n"
        "The chosen team name\n"
        "</selection>\n\n"
        f"Input: {value}"
    ).strip()


# =========================================================
# GENERATE / EVALUATE PROMPTS
# =========================================================

def build_generation_prompt(prompt: str, task: str, context: str = "") -> str:
    """Build a generator prompt, inserting refinement context when present."""
    if context:
        return f"{prompt}\n{context}\nTask: {task}"
    return f"{prompt}\nTask: {task}"


def build_evaluation_prompt(prompt: str, content: str, task: str) -> str:
    """Build an evaluator prompt for one candidate."""
    return f"{prompt}\nOriginal task: {task}\nContent to evaluate: {content}"


def build_refinement_context(previous_results: Sequence[str], feedback: str) -> str:
    """Summarize earlier candidates plus the latest feedback for regeneration.

    Every candidate is listed in attempt order as `- <candidate>`.
    """
    lines = ["Previous attempts:"]
    lines.extend(f"- {result}" for result in previous_results)
    lines.append(f"\nFeedback: {feedback}")
    return "\n".join(lines)
