"""Módulo de limpeza do slack-dm-cleaner.

Contém a resolução das conversas (DMs) e a máquina de estados que apaga o
histórico de cada conversa respeitando o rate limit do Slack.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Callable

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError, SlackClientError

from .client import delete_message, fetch_history, is_rate_limited, open_conversation
from .config import Config
from .utils import safe_sleep

logger = logging.getLogger(__name__)

RATE_LIMIT_WAIT_SECONDS = 30


class DeleteState(enum.Enum):
    """Estados da limpeza de uma conversa."""

    FETCHING = "fetching"
    DELETING = "deleting"
    RATE_LIMITED = "rate_limited"
    DONE = "done"
    FAILED = "failed"


@dataclass
class DeleteResult:
    """Resultado da limpeza de uma conversa.

    Attributes:
        conversation_id: ID da conversa processada.
        deleted: Mensagens apagadas com sucesso.
        dropped: Mensagens puladas por rate limit (não há nova tentativa).
        pages: Páginas de histórico buscadas.
        state: Estado final da máquina de estados.
    """

    conversation_id: str
    deleted: int = 0
    dropped: int = 0
    pages: int = 0
    state: DeleteState = DeleteState.FETCHING


def resolve_conversations(client: WebClient, config: Config) -> list[str]:
    """Retorna os IDs das conversas entre o bot e os usuários configurados.

    Se a lista `conversation` da configuração não estiver vazia, nenhum
    usuário é resolvido e o resultado é vazio: as conversas configuradas
    não são usadas.

    Args:
        client: Instância do WebClient.
        config: Configuração carregada.

    Returns:
        Um ID de conversa por usuário, na ordem da configuração.
    """
    if config.conversations:
        logger.warning(
            "Lista 'conversation' não vazia (%s): usuários não serão resolvidos "
            "e nenhuma conversa será limpa.",
            len(config.conversations),
        )
        return []

    conversations = []
    for user_id in config.user_ids:
        conversation_id = open_conversation(client, user_id)
        logger.info("Usuário %s -> conversa %s", user_id, conversation_id)
        conversations.append(conversation_id)
    return conversations


def delete_history(
    client: WebClient,
    conversation_id: str,
    *,
    rate_limit_wait: float = RATE_LIMIT_WAIT_SECONDS,
    on_rate_limit: Callable[[str, float], None] | None = None,
) -> DeleteResult:
    """Apaga todo o histórico de uma conversa.

    Busca a página mais recente, apaga cada mensagem na ordem da página e
    repete enquanto o Slack indicar que há mais mensagens. Em rate limit,
    espera `rate_limit_wait` segundos e segue para a próxima mensagem; a
    mensagem que falhou não é tentada de novo.

    Args:
        client: Instância do WebClient.
        conversation_id: ID da conversa.
        rate_limit_wait: Espera fixa em segundos após um rate limit.
        on_rate_limit: Callback chamado antes da espera.
                       Assinatura: (conversation_id, wait_seconds)

    Returns:
        Contadores da limpeza, com estado final DONE.

    Raises:
        SlackApiError: Erro da API que não seja rate limit (estado FAILED).
        SlackClientError: Falha do cliente (estado FAILED).
    """
    result = DeleteResult(conversation_id=conversation_id)
    page = None

    try:
        while result.state not in (DeleteState.DONE, DeleteState.FAILED):
            if result.state is DeleteState.FETCHING:
                page = fetch_history(client, conversation_id)
                result.pages += 1
                if not page.messages:
                    logger.info("All messages cleared for channel: %s", conversation_id)
                    _transition(result, DeleteState.DONE)
                else:
                    _transition(result, DeleteState.DELETING)

            elif result.state is DeleteState.DELETING:
                for message in page.messages:
                    ts = message["ts"]
                    logger.info(
                        "Deleting message in channel %s with timestamp %s",
                        conversation_id,
                        ts,
                    )
                    try:
                        delete_message(client, conversation_id, ts)
                    except SlackApiError as e:
                        if not is_rate_limited(e):
                            raise
                        _transition(result, DeleteState.RATE_LIMITED)
                        _wait_rate_limit(conversation_id, rate_limit_wait, on_rate_limit)
                        result.dropped += 1
                        _transition(result, DeleteState.DELETING)
                    else:
                        result.deleted += 1

                _transition(result, DeleteState.FETCHING if page.has_more else DeleteState.DONE)

    except (SlackApiError, SlackClientError):
        _transition(result, DeleteState.FAILED)
        logger.error(
            "Falha ao limpar conversa %s (apagadas: %s)", conversation_id, result.deleted
        )
        raise

    return result


def _transition(result: DeleteResult, state: DeleteState) -> None:
    """Muda o estado da limpeza e registra a transição em DEBUG."""
    logger.debug(
        "Conversa %s: %s -> %s", result.conversation_id, result.state.value, state.value
    )
    result.state = state


def _wait_rate_limit(
    conversation_id: str,
    wait: float,
    on_rate_limit: Callable[[str, float], None] | None,
) -> None:
    logger.warning("Slack limit exceeded, sleeping for %s seconds", wait)
    if on_rate_limit is not None:
        on_rate_limit(conversation_id, wait)
    safe_sleep(wait)


def clean_conversations(
    client: WebClient,
    conversation_ids: list[str],
    *,
    rate_limit_wait: float = RATE_LIMIT_WAIT_SECONDS,
    on_rate_limit: Callable[[str, float], None] | None = None,
) -> list[DeleteResult]:
    """Limpa as conversas em sequência; o primeiro erro interrompe tudo."""
    results = []
    for index, conversation_id in enumerate(conversation_ids, start=1):
        logger.info("[%s/%s] Limpando conversa %s", index, len(conversation_ids), conversation_id)
        results.append(
            delete_history(
                client,
                conversation_id,
                rate_limit_wait=rate_limit_wait,
                on_rate_limit=on_rate_limit,
            )
        )
    return results
