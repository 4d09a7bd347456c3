"""Error taxonomy shared by the LLM client and the workflow patterns.

Failure classes:
    - `CompletionError`: the completion call itself failed (network, auth,
      unknown provider, malformed or empty provider response).
    - `UnknownRouteError`: the router selected a key with no route-table entry.
    - `MissingTemplateVariableError`: a prompt template placeholder was left
      unresolved.
    - `LoopCancelledError`: the caller signalled cancellation of a
      generate/evaluate loop.

A missing tag in model output is not an error; the extractor returns an empty
string and the calling component decides how to react.
"""

from __future__ import annotations

from typing import Any, Iterable


class WorkflowError(Exception):
    """Base class for every error raised by `llm_workflows`."""


class CompletionError(WorkflowError):
    """Raised when one completion request does not produce usable text.

    Attributes:
        provider: Provider label active when the call failed.
        status_code: HTTP status code when the failure carried one.
    """

    def __init__(self, message: str, provider: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class UnknownRouteError(WorkflowError, LookupError):
    """Raised when the selected route key is absent from the route table."""

    def __init__(self, route_key: str, available: Iterable[str]) -> None:
        self.route_key = route_key
        self.available = tuple(available)
        super().__init__(
            f"Selected route {route_key!r} is invalid "
            f"(available: {', '.join(self.available) or 'none'})"
        )

    def __str__(self) -> str:
        return self.args[0]


class MissingTemplateVariableError(WorkflowError, ValueError):
    """Raised when prompt placeholders have no substitution value."""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = tuple(sorted(set(missing)))
        names = ", ".join("{" + name + "}" for name in self.missing)
        super().__init__(f"Missing required prompt variable(s): {names}")


class LoopCancelledError(WorkflowError):
    """Raised when a generate/evaluate loop observes its cancel signal.

    Attributes:
        history: Chain-of-thought items recorded before cancellation.
    """

    def __init__(self, history: list[Any]) -> None:
        self.history = list(history)
        super().__init__(f"Refinement loop cancelled after {len(self.history)} attempt(s)")
