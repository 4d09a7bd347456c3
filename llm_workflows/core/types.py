"""Data contracts shared by the workflow patterns.

Architectural role:
    Defines the minimal value types passed between the completion client, the
    tag parser and the five workflow patterns (`workflows`, `refinement`,
    `orchestrator`).

Lifecycle:
    Every value here is created and consumed inside one workflow invocation.
    Nothing is persisted across calls.

Determinism:
    The types are purely structural and state-free.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Protocol


class CompletionClient(Protocol):
    """Minimal async interface every workflow requires from the LLM layer."""

    async def __call__(self, prompt: str, system_prompt: str = "", model_name: str | None = None) -> str:
        """Return generated text for one prompt or raise on failure."""
        ...


@dataclass(frozen=True)
class RoutingDecision:
    """Parsed outcome of the router's classification call.

    Attributes:
        route_key: Normalized (trimmed, lowercase) selection; may be empty.
        reasoning: Model-provided rationale, informational only.
        available_routes: Route keys offered to the model, in table order.
    """

    route_key: str
    reasoning: str = ""
    available_routes: tuple[str, ...] = ()


@dataclass(frozen=True)
class SubTask:
    """One unit of work declared in an orchestrator decomposition."""

    type: str
    description: str


@dataclass(frozen=True)
class WorkerResult:
    """Worker output for one `SubTask`."""

    type: str
    description: str
    result: str


@dataclass(frozen=True)
class ChainOfThoughtItem:
    """Record of one generation attempt in the refinement loop."""

    thoughts: str
    result: str


class Verdict(str, Enum):
    """Evaluator classification. Only `PASS` ends the refinement loop."""

    PASS = "PASS"
    NEEDS_IMPROVEMENT = "NEEDS_IMPROVEMENT"
    FAIL = "FAIL"
    UNRECOGNIZED = "UNRECOGNIZED"

    @classmethod
    def from_text(cls, raw: str) -> "Verdict":
        """Map raw `<evaluation>` text to a verdict (case-insensitive exact match)."""
        normalized = (raw or "").upper()
        for verdict in (cls.PASS, cls.NEEDS_IMPROVEMENT, cls.FAIL):
            if normalized == verdict.value:
                return verdict
        return cls.UNRECOGNIZED


@dataclass(frozen=True)
class EvaluationOutcome:
    """Evaluator verdict plus feedback text.

    Attributes:
        verdict: Classified verdict.
        raw: Exact `<evaluation>` content as extracted.
        feedback: `<feedback>` content; may be empty.
    """

    verdict: Verdict
    raw: str
    feedback: str = ""

    @property
    def passed(self) -> bool:
        return self.verdict is Verdict.PASS


class LoopResult(NamedTuple):
    """Accepted candidate plus the full chain-of-thought history."""

    result: str
    history: list[ChainOfThoughtItem]


@dataclass(frozen=True)
class OrchestratorOutput:
    """Decomposition analysis plus one worker result per subtask, in order."""

    analysis: str
    worker_results: tuple[WorkerResult, ...] = field(default_factory=tuple)
