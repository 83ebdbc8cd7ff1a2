from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from config import API_KEY_ENV
from extraction import ModelGateway


def _completion(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def make_completion():
    return _completion


@pytest.fixture
def fake_client():
    client = MagicMock()
    client.chat.completions.create.return_value = _completion("{}")
    return client


@pytest.fixture
def gateway(fake_client):
    return ModelGateway("test-key", client=fake_client)


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv(API_KEY_ENV, raising=False)
