"""Funções utilitárias para o slack-dm-cleaner."""

import logging
import os
import time

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "SLACK_DM_CLEANER_LOG_LEVEL"


def safe_sleep(seconds: float) -> None:
    """Bloqueia o processo para respeitar o rate limit.

    Args:
        seconds: Tempo de espera em segundos. Deve ser um número não negativo.

    Raises:
        ValueError: Se seconds não for um número ou for negativo.
    """
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise ValueError("safe_sleep: seconds deve ser um número (int ou float)")
    if seconds < 0:
        raise ValueError("safe_sleep: seconds deve ser não negativo")

    if seconds > 0:
        logger.debug("Aguardando %.2fs antes da próxima operação", seconds)
    time.sleep(seconds)


def env_log_level(default: int = logging.INFO) -> int:
    """Lê o nível de log da variável de ambiente, se definida.

    Aceita nomes (``DEBUG``, ``warning``) ou números. Valores inválidos
    geram um aviso e caem no padrão.
    """
    v = os.getenv(LOG_LEVEL_ENV)
    if not v or not v.strip():
        return default
    v = v.strip()
    if v.isdigit():
        return int(v)
    level = logging.getLevelName(v.upper())
    if isinstance(level, int):
        return level
    logger.warning("Variável de ambiente %s contém valor inválido: %s", LOG_LEVEL_ENV, v)
    return default
