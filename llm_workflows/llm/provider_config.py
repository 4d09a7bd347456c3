"""Provider/runtime configuration for the LLM layer.

Architectural role:
    Centralizes model/provider selection and credential lookup for `llm.service`
    and `llm.client`.

Model call flow integration:
    - `service.generate_answer` consumes `MODEL_NAME`, `SYSTEM_MESSAGE` and
      `MAX_TOKENS`.
    - `client.send_request` consumes `PROVIDER`, the endpoint map, key
      resolution and `REQUEST_TIMEOUT`.

Provider map:
    `gemini` and `anthropic` have dedicated payload mappings in `client`. Every
    other entry speaks the OpenAI chat-completions format and is selected with
    `PROVIDER=<name>`: `local` for a self-hosted server without a key, `openai`,
    and the `groq` and `openrouter` gateways for hosted open-weight models.
    A new OpenAI-compatible gateway needs only a new entry here.

Determinism:
    Deterministic for a fixed process environment and key files. Values are resolved
    at import time (plus runtime key-file reads in `load_key`).

Failure behavior:
    Missing key material is represented as `None`; `client` turns it into a
    `CompletionError`.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Primary model routing controls.
PROVIDER = os.getenv("PROVIDER", "gemini").strip().lower()
MODEL_NAME = os.getenv("MODEL_NAME", "gemini-2.5-pro-preview-03-25")

# Transport limits. One attempt per call; no retry loop exists.
REQUEST_TIMEOUT = float(os.getenv("LLM_TIMEOUT_SECONDS", "120"))
MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "4096"))

# Endpoint and key file per provider. `key_file: None` sends no credentials.
PROVIDERS = {
    "gemini": {
        "url": "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
        "key_file": "config/gemini.key",
    },
    "anthropic": {"url": "https://api.anthropic.com/v1/messages", "key_file": "config/anthropic.key"},
    "openai": {"url": "https://api.openai.com/v1/chat/completions", "key_file": "config/openai.key"},
    "groq": {"url": "https://api.groq.com/openai/v1/chat/completions", "key_file": "config/groq.key"},
    "openrouter": {"url": "https://openrouter.ai/api/v1/chat/completions", "key_file": "config/openrouter.key"},
    "local": {"url": os.getenv("LOCAL_LLM_URL", "http://127.0.0.1:8080/v1/chat/completions"), "key_file": None},
}

ANTHROPIC_URL = PROVIDERS["anthropic"]["url"]
GEMINI_URL_TEMPLATE = PROVIDERS["gemini"]["url"]

# Default system instruction applied when a caller passes none.
SYSTEM_MESSAGE = os.getenv("SYSTEM_MESSAGE", "")


def key_env_name(path: str) -> str:
    """`config/gemini.key` -> `GEMINI_API_KEY`."""
    stem = os.path.splitext(os.path.basename(path))[0]
    return f"{stem.upper()}_API_KEY"


def load_key(path):
    """Resolve an API key for a configured key file.

    The `<STEM>_API_KEY` environment variable wins over the file contents.

    Returns:
        Key string, or `None` for a `None` path, a missing file or a blank file.
    """
    if not path:
        return None

    from_env = os.getenv(key_env_name(path))
    if from_env:
        return from_env

    try:
        with open(path, "r") as f:
            return f.read().strip() or None
    except FileNotFoundError:
        return None
