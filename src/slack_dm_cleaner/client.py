"""Funções para interação com a API Web do Slack."""

import logging
from dataclasses import dataclass, field
from typing import Any

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

logger = logging.getLogger(__name__)

RATE_LIMIT_ERROR = "ratelimited"


@dataclass(frozen=True)
class HistoryPage:
    """Uma página do histórico de uma conversa."""

    messages: list[dict[str, Any]] = field(default_factory=list)
    has_more: bool = False


def create_client(token: str) -> WebClient:
    """Cria o cliente Web do Slack.

    Os retry handlers padrão do slack_sdk só tratam erros de conexão, então o
    rate limit chega até o cleaner como SlackApiError.

    Args:
        token: Token da API (bot ou usuário).
    """
    return WebClient(token=token)


def is_rate_limited(error: Exception) -> bool:
    """Retorna True se o erro é um SlackApiError de rate limit.

    Vale o código `ratelimited` da resposta ou o texto "rate limit" na
    mensagem. Outros erros (conexão, cliente) nunca contam como rate limit.
    """
    if not isinstance(error, SlackApiError):
        return False
    if error.response is not None and error.response.get("error") == RATE_LIMIT_ERROR:
        return True
    return "rate limit" in str(error).lower()


def open_conversation(client: WebClient, user_id: str) -> str:
    """Abre (ou reutiliza) a DM com o usuário e retorna o ID do canal.

    Args:
        client: Instância do WebClient.
        user_id: ID do usuário no Slack.

    Returns:
        ID da conversa (canal de DM).
    """
    response = client.conversations_open(users=[user_id])
    channel_id = response["channel"]["id"]
    logger.debug("DM com usuário %s: canal %s", user_id, channel_id)
    return channel_id


def fetch_history(client: WebClient, conversation_id: str) -> HistoryPage:
    """Busca a página mais recente do histórico da conversa.

    Sempre com os mesmos parâmetros: como as mensagens são apagadas entre
    chamadas, a página seguinte volta a ser a mais recente.
    """
    response = client.conversations_history(channel=conversation_id)
    return HistoryPage(
        messages=list(response.get("messages") or []),
        has_more=bool(response.get("has_more", False)),
    )


def delete_message(client: WebClient, conversation_id: str, ts: str) -> None:
    """Apaga uma mensagem pelo par (conversa, timestamp)."""
    client.chat_delete(channel=conversation_id, ts=ts)
