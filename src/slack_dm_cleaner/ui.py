"""Módulo de UI rica para o slack-dm-cleaner.

Centraliza elementos visuais usando Rich para spinners, tabelas e formatação.
"""

from typing import Any, ContextManager

from rich.console import Console
from rich.table import Table

# Console global para uso em todo o projeto (stderr para não misturar com pipes)
console = Console(stderr=True)

_quiet: bool = False


def set_quiet(quiet: bool) -> None:
    """Liga/desliga a supressão de mensagens informativas."""
    global _quiet
    _quiet = quiet


def spinner(message: str) -> ContextManager[Any]:
    """Spinner do Rich exibido enquanto uma chamada ao Slack bloqueia."""
    return console.status(f"[cyan]{message}[/]", spinner="line")


def print_stats_table(
    title: str, data: dict[str, Any], title_style: str = "bold"
) -> None:
    """Exibe tabela formatada de estatísticas.

    Args:
        title: Título da tabela
        data: Dicionário com chave-valor para exibir
        title_style: Estilo do título
    """
    if _quiet:
        return

    table = Table(title=title, show_header=False, title_style=title_style)
    table.add_column("Campo", style="dim")
    table.add_column("Valor", justify="right")

    for key, value in data.items():
        if isinstance(value, int):
            formatted_value = f"[bold]{value:,}[/]".replace(",", ".")
        else:
            formatted_value = str(value)
        table.add_row(key, formatted_value)

    console.print(table)


def print_success(message: str) -> None:
    """Mensagem final de sucesso (suprimida em modo quiet)."""
    if not _quiet:
        console.print(f"[green]OK:[/] {message}")


def print_error(message: str, hint: str | None = None) -> None:
    """Mostra um erro; `hint` sai na linha seguinte, esmaecida.

    Erros sempre aparecem, mesmo em modo quiet.
    """
    console.print(f"[bold red]Erro:[/] {message}")
    if hint:
        console.print(f"  [dim]Dica: {hint}[/]")


def print_warning(message: str) -> None:
    console.print(f"[yellow]Aviso:[/] {message}")


def print_rate_limit(conversation_id: str, wait_seconds: float) -> None:
    """Avisa que a conversa caiu no rate limit e quanto tempo vamos esperar."""
    console.print(
        f"[yellow]Rate limit:[/] conversa [cyan]{conversation_id}[/cyan], "
        f"aguardando [bold]{wait_seconds:g}s[/bold]..."
    )

