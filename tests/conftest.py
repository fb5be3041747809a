"""Configuração de testes para o slack-dm-cleaner."""

from unittest import mock

import pytest
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from slack_dm_cleaner import ui


@pytest.fixture
def slack_error():
    """Factory de SlackApiError com o código de erro informado."""
    def _make(code: str) -> SlackApiError:
        return SlackApiError("The request to the Slack API failed.", {"ok": False, "error": code})
    return _make


# =============================================================================
# Rich Console Mock
# =============================================================================

@pytest.fixture
def mock_console(mocker):
    """Mock do console global Rich para testes de UI."""
    return mocker.patch("slack_dm_cleaner.ui.console")


@pytest.fixture(autouse=True)
def reset_quiet():
    """Garante que o modo quiet não vaza entre testes."""
    ui.set_quiet(False)
    yield
    ui.set_quiet(False)


# =============================================================================
# Slack WebClient Mock
# =============================================================================

@pytest.fixture
def mock_slack_client():
    """Mock de WebClient com respostas vazias por padrão."""
    client = mock.Mock(spec=WebClient)
    client.conversations_history.return_value = {"messages": [], "has_more": False}
    return client


@pytest.fixture
def no_sleep(mocker):
    """Evita as esperas de rate limit durante os testes."""
    return mocker.patch("slack_dm_cleaner.cleaner.safe_sleep")


# =============================================================================
# Arquivos de configuração
# =============================================================================

@pytest.fixture
def write_settings(tmp_path):
    """Factory que grava um arquivo YAML e retorna o caminho."""
    def _write(content: str, name: str = "settings.yml"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
