"""slack-dm-cleaner: apaga o histórico de DMs de um app do Slack.

Este pacote fornece funcionalidades para:
- Ler a configuração YAML (token + usuários/conversas)
- Abrir as DMs entre o bot e os usuários
- Apagar todo o histórico respeitando o rate limit do Slack
"""

__version__ = "1.0.0"

from .cleaner import delete_history, resolve_conversations
from .config import Config, InvalidConfigError, load_config

__all__ = [
    "Config",
    "InvalidConfigError",
    "delete_history",
    "load_config",
    "resolve_conversations",
]
