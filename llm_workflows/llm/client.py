"""Provider-specific transport client for LLM requests.

Architectural role:
    Executes HTTP requests against configured model providers and normalizes
    response parsing into a single text value.

Model invocation flow:
    `service.generate_answer` -> `send_request(payload)` -> provider branch
    (OpenAI-compatible / Anthropic / Gemini) -> parsed text.

Retry behavior:
    No retry loop is implemented. Each HTTP call is attempted once with
    `REQUEST_TIMEOUT`.

Determinism:
    Provider routing and payload transformation are deterministic for fixed config and
    payload. Output text remains non-deterministic due to remote model inference.

Failure handling model:
    Every non-success outcome raises `CompletionError` carrying a sanitized,
    provider-labelled message. Raw response bodies and credentials never appear in
    the error text.
"""

import logging

import requests

from llm_workflows.errors import CompletionError
from llm_workflows.llm.provider_config import (
    PROVIDER,
    MODEL_NAME,
    PROVIDERS,
    ANTHROPIC_URL,
    GEMINI_URL_TEMPLATE,
    REQUEST_TIMEOUT,
    MAX_TOKENS,
    load_key,
)


logger = logging.getLogger(__name__)


def _label(provider_name) -> str:
    return str(provider_name or "provider").upper()


def _build_sanitized_http_error(provider_name: str, err: requests.exceptions.RequestException) -> CompletionError:
    """Build provider-labeled HTTP error without exposing raw internals.

    Args:
        provider_name: Active provider label.
        err: Request exception instance.

    Returns:
        `CompletionError` with optional status code.
    """
    status_code = None
    if getattr(err, "response", None) is not None:
        status_code = getattr(err.response, "status_code", None)

    label = _label(provider_name)
    if status_code:
        message = f"{label} HTTP ERROR ({status_code})"
    else:
        message = f"{label} HTTP ERROR"
    return CompletionError(message, provider=provider_name, status_code=status_code)


def _require_text(provider_name: str, text) -> str:
    """Return stripped model text or raise when the provider sent nothing usable."""
    if not isinstance(text, str) or not text.strip():
        raise CompletionError(f"{_label(provider_name)} EMPTY RESPONSE", provider=provider_name)
    return text.strip()


def _require_key(provider_name: str, key_file) -> str:
    api_key = load_key(key_file)
    if not api_key:
        raise CompletionError(f"{_label(provider_name)} KEY FILE NOT FOUND", provider=provider_name)
    return api_key


def _split_messages(payload: dict):
    """Separate the system instruction from user/assistant turns."""
    system_prompt = None
    turns = []

    for msg in payload.get("messages", []):
        if not isinstance(msg, dict):
            continue

        role = msg.get("role")
        content = msg.get("content", "")

        if role == "system":
            if isinstance(content, str) and content.strip():
                system_prompt = content.strip()
        elif role in ["user", "assistant"] and content:
            turns.append({"role": role, "content": content})

    return system_prompt, turns


def _post_json(url: str, headers: dict, body: dict) -> dict:
    response = requests.post(
        url,
        headers=headers,
        json=body,
        timeout=REQUEST_TIMEOUT,
    )
    response.raise_for_status()
    return response.json()


def _send_openai_compatible(payload: dict) -> str:
    config = PROVIDERS[PROVIDER]

    headers = {
        "Content-Type": "application/json"
    }

    if config["key_file"]:
        api_key = _require_key(PROVIDER, config["key_file"])
        headers["Authorization"] = f"Bearer {api_key}"

    data = _post_json(config["url"], headers, payload)
    return _require_text(PROVIDER, data["choices"][0]["message"]["content"])


def _send_anthropic(payload: dict) -> str:
    api_key = _require_key("anthropic", PROVIDERS["anthropic"]["key_file"])

    headers = {
        "x-api-key": api_key,
        "anthropic-version": "2023-06-01",
        "Content-Type": "application/json",
    }

    system_prompt, turns = _split_messages(payload)

    anthropic_payload = {
        "model": payload.get("model", MODEL_NAME),
        "max_tokens": payload.get("max_tokens", MAX_TOKENS),
        "messages": turns,
    }

    if system_prompt:
        anthropic_payload["system"] = system_prompt

    if "temperature" in payload:
        anthropic_payload["temperature"] = payload["temperature"]

    data = _post_json(ANTHROPIC_URL, headers, anthropic_payload)
    return _require_text("anthropic", data["content"][0]["text"])


def _send_gemini(payload: dict) -> str:
    api_key = _require_key("gemini", PROVIDERS["gemini"]["key_file"])

    url = GEMINI_URL_TEMPLATE.format(model=payload.get("model", MODEL_NAME))

    headers = {
        "x-goog-api-key": api_key,
        "Content-Type": "application/json",
    }

    system_prompt, turns = _split_messages(payload)

    gemini_payload = {
        "contents": [
            {
                "role": "model" if turn["role"] == "assistant" else "user",
                "parts": [{"text": str(turn["content"])}],
            }
            for turn in turns
        ],
    }

    if system_prompt:
        gemini_payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}

    generation_config = {}
    if "temperature" in payload:
        generation_config["temperature"] = payload["temperature"]
    if "max_tokens" in payload:
        generation_config["maxOutputTokens"] = payload["max_tokens"]
    if generation_config:
        gemini_payload["generationConfig"] = generation_config

    data = _post_json(url, headers, gemini_payload)
    return _require_text("gemini", data["candidates"][0]["content"]["parts"][0]["text"])


def _malformed_response_error() -> CompletionError:
    logger.error("Unexpected response structure from provider %s", PROVIDER)
    return CompletionError(f"{_label(PROVIDER)} MALFORMED RESPONSE", provider=PROVIDER)


def send_request(payload: dict) -> str:
    """Send one request to the configured provider and parse response content.

    Args:
        payload: Provider-agnostic chat payload produced by `service`.

    Returns:
        Final response text, stripped.

    Provider handling:
        - OpenAI-compatible providers: direct pass-through payload.
        - Anthropic: message remap + optional `system` + `max_tokens`.
        - Gemini: message remap to `contents`, `systemInstruction` and
          `generationConfig`.

    Raises:
        CompletionError: missing key, unsupported provider, HTTP/network failure,
        malformed response structure, or empty response text.
    """
    try:
        if PROVIDER == "anthropic":
            return _send_anthropic(payload)

        if PROVIDER == "gemini":
            return _send_gemini(payload)

        if PROVIDER in PROVIDERS:
            return _send_openai_compatible(payload)

    # JSONDecodeError is also a RequestException; a non-JSON body is malformed.
    except requests.exceptions.JSONDecodeError as err:
        raise _malformed_response_error() from err

    except requests.exceptions.RequestException as err:
        error = _build_sanitized_http_error(PROVIDER, err)
        logger.error("Completion request failed: %s", error)
        raise error from err

    except (KeyError, IndexError, TypeError, ValueError) as err:
        raise _malformed_response_error() from err

    raise CompletionError(f"INVALID PROVIDER: {PROVIDER}", provider=PROVIDER)
