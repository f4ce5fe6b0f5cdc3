"""Shared pytest fixtures."""

from typing import Any

import pytest
import pytest_asyncio

from ainotes.config import Config
from ainotes.core.core import Core
from ainotes.core.modules.note.models import NoteFormData
from ainotes.core.modules.summary.providers import SummaryProvider
from ainotes.core.storage import MemoryStorage


class FakeProvider(SummaryProvider):
    """Provider returning scripted responses, or raising scripted errors."""

    def __init__(self, *responses: Any) -> None:
        super().__init__(model="fake-model", max_tokens=550, temperature=0.7, timeout=5.0)
        self.responses = list(responses)
        self.calls: list[list[dict[str, str]]] = []

    async def _complete(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        self.calls.append(messages)
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def config():
    """Config using in-memory storage and no AI provider."""
    return Config(
        _env_file=None,
        storage_backend="memory",
        llm_api_key="",
        seed_welcome_note=False,
    )


@pytest_asyncio.fixture
async def core(config):
    """Started core without a summary provider."""
    core = Core(config, storage=MemoryStorage())
    async with core.lifespan():
        yield core


@pytest.fixture
def note_data():
    return NoteFormData(
        title="Groceries",
        content="Buy milk. Buy bread. Call the bakery about the cake.",
        tags=["shopping"],
    )


@pytest.fixture
def fake_provider():
    """Factory for providers answering with the given responses in order."""
    return FakeProvider


@pytest_asyncio.fixture
async def core_with_provider(config):
    """Factory for started cores wired to a given summary provider."""
    started: list[Core] = []

    async def factory(provider: SummaryProvider, **overrides: Any) -> Core:
        core = Core(config.model_copy(update=overrides), storage=MemoryStorage(), summary_provider=provider)
        await core.on_start()
        started.append(core)
        return core

    yield factory
    for core in started:
        await core.on_stop()
