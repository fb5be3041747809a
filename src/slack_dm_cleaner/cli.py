"""CLI module for slack-dm-cleaner."""

import argparse
import logging
import sys

import yaml
from dotenv import load_dotenv
from slack_sdk.errors import SlackApiError, SlackClientError

from . import __version__, ui
from .cleaner import DeleteResult, clean_conversations, resolve_conversations
from .client import create_client
from .config import Config, InvalidConfigError, load_config
from .utils import env_log_level

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse argumentos da linha de comando."""
    parser = argparse.ArgumentParser(
        prog="slack-dm-cleaner",
        description="An easy button to clear DMs when using a slack app.",
    )
    parser.add_argument(
        "settings",
        metavar="YML_PATH",
        help="The input settings file.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Logs detalhados (DEBUG), incluindo o slack_sdk.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Só avisos e erros; sem tabela de resumo.",
    )
    return parser.parse_args(argv)


def setup_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configura o logging da aplicação."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = env_log_level()

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("slack_sdk").setLevel(logging.DEBUG if verbose else logging.WARNING)


def format_error(error: Exception) -> tuple[str, str | None]:
    """Converte erro em mensagem amigável e dica opcional."""
    if isinstance(error, FileNotFoundError):
        return f"Arquivo de configuração não encontrado: {error.filename}", None
    if isinstance(error, OSError):
        return f"Não foi possível ler o arquivo de configuração: {error}", None
    if isinstance(error, yaml.YAMLError):
        return f"YAML inválido: {error}", None
    if isinstance(error, InvalidConfigError):
        return (
            f"Configuração inválida: {error}",
            "Informe 'apitoken' e ao menos um item em 'userid' ou 'conversation'.",
        )
    if isinstance(error, SlackApiError):
        detail = error.response.get("error") if error.response is not None else None
        return (
            f"Erro da API do Slack: {detail or error}",
            "Verifique o token e os escopos do app (im:write, im:history, chat:write).",
        )
    return f"Erro do cliente Slack: {error}", None


def run(config: Config) -> list[DeleteResult]:
    """Abre as conversas e apaga o histórico de cada uma.

    O primeiro erro interrompe a execução e é propagado.
    """
    client = create_client(config.api_token)

    with ui.spinner("Resolvendo conversas..."):
        conversations = resolve_conversations(client, config)

    if not conversations:
        logger.warning("Nenhuma conversa para limpar.")
        return []

    return clean_conversations(client, conversations, on_rate_limit=ui.print_rate_limit)


def print_summary(results: list[DeleteResult]) -> None:
    """Exibe tabela com o resumo da execução."""
    ui.print_stats_table(
        "Resumo",
        {
            "Conversas": len(results),
            "Mensagens apagadas": sum(r.deleted for r in results),
            "Puladas (rate limit)": sum(r.dropped for r in results),
            "Páginas lidas": sum(r.pages for r in results),
        },
    )


def main(argv: list[str] | None = None) -> int:
    """Entry-point: retorna o código de saída do processo."""
    load_dotenv()
    args = parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)
    ui.set_quiet(args.quiet)

    try:
        config = load_config(args.settings)
        results = run(config)
    except KeyboardInterrupt:
        ui.print_warning("Cancelado.")
        return EXIT_INTERRUPTED
    except (OSError, yaml.YAMLError, InvalidConfigError, SlackClientError) as e:
        logger.error("Starting slack cleaner: %s", e)
        message, hint = format_error(e)
        ui.print_error(message, hint)
        return EXIT_ERROR

    print_summary(results)
    dropped = sum(r.dropped for r in results)
    if dropped:
        ui.print_warning(
            f"{dropped} mensagem(ns) pulada(s) por rate limit; rode de novo para apagá-las."
        )
    ui.print_success("Concluído.")
    return EXIT_OK


def cli_entry() -> None:
    """Entry-point do console script."""
    sys.exit(main())
