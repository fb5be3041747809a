"""Módulo de configuração do slack-dm-cleaner (arquivo YAML)."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


class InvalidConfigError(ValueError):
    """Arquivo de configuração sem token ou sem alvos."""


@dataclass(frozen=True)
class Config:
    """Configuração imutável lida do arquivo YAML.

    Attributes:
        api_token: Token da API do Slack (chave `apitoken`).
        conversations: IDs de conversas (chave `conversation`).
        user_ids: IDs de usuários (chave `userid`).
    """

    api_token: str
    conversations: tuple[str, ...] = ()
    user_ids: tuple[str, ...] = ()


def _scalar_str(value: Any) -> str | None:
    """Converte um escalar YAML para string; None para listas e mapeamentos.

    `12345` e `true` viram "12345" e "true", como numa leitura em campo texto.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def _string_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    """Lê uma lista opcional de escalares do documento YAML."""
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise InvalidConfigError(f"'{key}' deve ser uma lista de strings")
    items = tuple(_scalar_str(v) for v in value)
    if any(item is None for item in items):
        raise InvalidConfigError(f"'{key}' deve ser uma lista de strings")
    return items


def validate_config(data: Any) -> Config:
    """Valida o documento YAML já parseado e monta o Config.

    Args:
        data: Resultado de `yaml.safe_load` (None para arquivo vazio).

    Returns:
        Configuração validada.

    Raises:
        InvalidConfigError: Se o token estiver vazio ou não houver alvos.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidConfigError("o arquivo de configuração deve ser um mapeamento YAML")

    token = _scalar_str(data.get("apitoken"))
    if not token:
        raise InvalidConfigError("invalid api token")

    conversations = _string_list(data, "conversation")
    user_ids = _string_list(data, "userid")
    if not conversations and not user_ids:
        raise InvalidConfigError("need either one user or conversation")

    return Config(api_token=token, conversations=conversations, user_ids=user_ids)


def load_config(path: str | Path) -> Config:
    """Carrega e valida o arquivo de configuração YAML.

    Args:
        path: Caminho do arquivo YAML.

    Returns:
        Configuração carregada.

    Raises:
        OSError: Se o arquivo não puder ser lido.
        yaml.YAMLError: Se o YAML for malformado.
        InvalidConfigError: Se a configuração for inválida.
    """
    path = Path(path)
    # Bytes: o PyYAML detecta a codificação e falha com ReaderError (YAMLError)
    with open(path, "rb") as f:
        data = yaml.safe_load(f)

    config = validate_config(data)
    logger.debug(
        "Configuração carregada de %s: %s conversa(s), %s usuário(s)",
        path,
        len(config.conversations),
        len(config.user_ids),
    )
    return config
