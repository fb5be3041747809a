"""Testes para o módulo client.py."""

import pytest
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError, SlackClientError

from slack_dm_cleaner.client import (
    HistoryPage,
    create_client,
    delete_message,
    fetch_history,
    is_rate_limited,
    open_conversation,
)


def test_create_client_uses_token():
    """create_client deve retornar WebClient com o token informado."""
    client = create_client("xoxb-123")
    assert isinstance(client, WebClient)
    assert client.token == "xoxb-123"


class TestIsRateLimited:
    """Testes para is_rate_limited."""

    def test_ratelimited_error_code(self, slack_error):
        """Código 'ratelimited' é rate limit."""
        assert is_rate_limited(slack_error("ratelimited")) is True

    @pytest.mark.parametrize("code", ["cant_delete_message", "message_not_found", "invalid_auth"])
    def test_other_error_codes(self, slack_error, code):
        """Outros códigos não são rate limit."""
        assert is_rate_limited(slack_error(code)) is False

    def test_api_error_message_text(self):
        """SlackApiError com 'rate limit' na mensagem também conta."""
        error = SlackApiError("slack rate limit exceeded", {"ok": False, "error": "unknown"})
        assert is_rate_limited(error) is True

    def test_client_error_text_is_not_rate_limit(self):
        """SlackClientError nunca é rate limit, mesmo com o texto."""
        assert is_rate_limited(SlackClientError("slack rate limit exceeded")) is False

    def test_unrelated_exception(self):
        """Erros genéricos não são rate limit."""
        assert is_rate_limited(RuntimeError("boom")) is False


class TestOpenConversation:
    """Testes para open_conversation."""

    def test_returns_channel_id(self, mock_slack_client):
        """Deve abrir a DM com o usuário e retornar o ID do canal."""
        mock_slack_client.conversations_open.return_value = {"ok": True, "channel": {"id": "D42"}}

        assert open_conversation(mock_slack_client, "U1") == "D42"
        mock_slack_client.conversations_open.assert_called_once_with(users=["U1"])

    def test_propagates_error(self, mock_slack_client, slack_error):
        """Erro da API deve ser propagado."""
        mock_slack_client.conversations_open.side_effect = slack_error("user_not_found")

        with pytest.raises(SlackClientError):
            open_conversation(mock_slack_client, "U1")


class TestFetchHistory:
    """Testes para fetch_history."""

    def test_returns_page(self, mock_slack_client):
        """Deve montar HistoryPage com mensagens e has_more."""
        messages = [{"ts": "1.0"}, {"ts": "2.0"}]
        mock_slack_client.conversations_history.return_value = {
            "messages": messages,
            "has_more": True,
        }

        page = fetch_history(mock_slack_client, "D1")

        assert page == HistoryPage(messages=messages, has_more=True)
        mock_slack_client.conversations_history.assert_called_once_with(channel="D1")

    def test_missing_fields(self, mock_slack_client):
        """Resposta sem messages/has_more vira página vazia."""
        mock_slack_client.conversations_history.return_value = {"ok": True}

        page = fetch_history(mock_slack_client, "D1")

        assert page.messages == []
        assert page.has_more is False

    def test_same_parameters_on_every_call(self, mock_slack_client):
        """Não há cursor: toda chamada usa os mesmos parâmetros."""
        fetch_history(mock_slack_client, "D1")
        fetch_history(mock_slack_client, "D1")

        calls = mock_slack_client.conversations_history.call_args_list
        assert calls[0] == calls[1]


def test_delete_message(mock_slack_client):
    """delete_message deve chamar chat.delete com canal e timestamp."""
    delete_message(mock_slack_client, "D1", "123.456")
    mock_slack_client.chat_delete.assert_called_once_with(channel="D1", ts="123.456")
