"""Workflow orchestration package.

Architectural role:
    Exposes the five control-flow patterns that sit between callers (CLI, HTTP
    adapter, application code) and the completion client.

Composition:
    - `types`: shared value types and the `CompletionClient` protocol.
    - `workflows`: `chain`, `parallel`, `route`.
    - `refinement`: `generate`, `evaluate`, `loop`.
    - `orchestrator`: `TaskOrchestrator`.

Determinism and side effects:
    Package import itself is deterministic and side-effect free. Runtime side
    effects are completion calls and log records.
"""
