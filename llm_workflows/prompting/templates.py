"""Placeholder templates for caller-supplied prompts.

Format:
    Any `{key}` token whose inner text is a key of the value mapping is
    substituted by exact string match, so keys like `target-audience` work.
    A `{...}` token with no value is a placeholder when its inner text has no
    whitespace or quote characters. Other brace groups (JSON examples such as
    `{"key": 1}`, `{ spaced }`) are left untouched.

Validation:
    Every placeholder must have a value. Unresolved placeholders raise
    `MissingTemplateVariableError` before any text is produced, so an unfilled
    token can never reach the model. Extra values are ignored.

Substitution:
    Single pass. Substituted values are not rescanned, so a value containing
    `{something}` is inserted verbatim.

Typed fields:
    `OrchestratorFields` and `WorkerFields` name the fields the task
    orchestrator supplies, so well-typed callers cannot forget one.
    `PromptTemplate.require` validates a template against a known key set
    ahead of time.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from llm_workflows.errors import MissingTemplateVariableError


# Every innermost brace group; values may fill any of them.
BRACE_TOKEN_PATTERN = re.compile(r"\{([^{}]+)\}")

# Brace groups that must be filled: no whitespace, no quotes.
PLACEHOLDER_PATTERN = re.compile(r"[^\s\"'`]+")


def _is_placeholder(name: str) -> bool:
    return PLACEHOLDER_PATTERN.fullmatch(name) is not None


class PromptTemplate:
    """Prompt text with validated `{name}` placeholders."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.placeholders = frozenset(
            name for name in BRACE_TOKEN_PATTERN.findall(text) if _is_placeholder(name)
        )

    def __repr__(self) -> str:
        return f"PromptTemplate(placeholders={sorted(self.placeholders)!r})"

    def missing(self, keys: Iterable[str]) -> set[str]:
        """Return placeholders not covered by `keys`."""
        return set(self.placeholders) - set(keys)

    def require(self, keys: Iterable[str]) -> None:
        """Raise `MissingTemplateVariableError` unless `keys` cover every placeholder."""
        missing = self.missing(keys)
        if missing:
            raise MissingTemplateVariableError(missing)

    def render(self, values: Mapping[str, Any]) -> str:
        """Substitute every `{key}` present in `values` (stringified)."""
        self.require(values.keys())

        def substitute(match: re.Match) -> str:
            name = match.group(1)
            if name in values:
                return str(values[name])
            return match.group(0)

        return BRACE_TOKEN_PATTERN.sub(substitute, self.text)


def format_prompt(template: str, **values: Any) -> str:
    """Generic substitution path for dynamically supplied templates."""
    return PromptTemplate(template).render(values)


@dataclass(frozen=True)
class OrchestratorFields:
    """Values available to the orchestrator (decomposition) template."""

    task: str
    context: Mapping[str, Any] = field(default_factory=dict)

    KEYS = frozenset({"task"})

    def as_values(self) -> dict[str, Any]:
        # Context entries are applied last and may shadow the built-in names.
        return {"task": self.task, **self.context}


@dataclass(frozen=True)
class WorkerFields:
    """Values available to the worker template for one subtask."""

    original_task: str
    task_type: str
    task_description: str
    context: Mapping[str, Any] = field(default_factory=dict)

    KEYS = frozenset({"original_task", "task_type", "task_description"})

    def as_values(self) -> dict[str, Any]:
        return {
            "original_task": self.original_task,
            "task_type": self.task_type,
            "task_description": self.task_description,
            **self.context,
        }
