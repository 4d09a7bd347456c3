"""Parsing and classification helpers for model output.

Module scope:
- Tag-delimited structured-output parsing (`tag_parser`).
- LLM-driven route selection (`intent_router`).

Determinism profile:
- Parsing is deterministic; route selection is model-backed.
"""
