"""Shared test fixtures."""

from __future__ import annotations

import pytest

from llm_workflows.llm import service
from tests.fakes import ScriptedLLM


@pytest.fixture()
def scripted_llm(monkeypatch):
    """Install a `ScriptedLLM` as the default completion client; returns a factory."""

    def _install(responses) -> ScriptedLLM:
        llm = ScriptedLLM(responses)
        monkeypatch.setattr(service, "llm_call", llm)
        return llm

    return _install
