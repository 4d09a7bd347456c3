"""llm-workflows adapter package.

Architectural role:
- Defines the external interaction boundary for CLI and HTTP interfaces.
- Performs transport-level validation and response shaping.
- Delegates all control flow to the `core` workflow patterns.

Scope:
- `demos`: demonstration prompts and inputs for the five patterns.
- `cli`: terminal runner for the demos.
- `http_api`: FastAPI endpoints exposing the patterns.
"""
