"""
Shared pytest fixtures.

The OpenAI client is never contacted: `fake_client` mimics the
`client.chat.completions.create` call and returns whatever reply a test
puts in `fake_client.reply`.
"""
from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

# ── Make the project root importable without installing the package ────────────
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

JEWELRY_REPLY = '{"main_category":"Jewelry","subcategory":"Ear Cuffs","characteristics":["gold","handcrafted"]}'


def make_completion(content: str | None) -> SimpleNamespace:
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def fake_client():
    """A stand-in for openai.AsyncOpenAI answering with the Jewelry reply."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=make_completion(JEWELRY_REPLY))
    return client
