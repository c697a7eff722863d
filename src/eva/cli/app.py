"""Main CLI application using Typer."""
import asyncio

import typer
import uvicorn
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..conversation import ChatSession, ConversationStore, Sender
from ..errors import ChatNotFoundError, InvalidInputError
from ..log import setup_logging
from ..server import create_app
from .providers import get_client_gateway, require_settings

app = typer.Typer(
    name="eva",
    help="Eva, an emotional virtual assistant for health and wellness",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()

CHAT_HELP = "[dim]Commands: /new, /chats, /switch <n>, /quit[/dim]"


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default: HOST or 0.0.0.0)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Listen port (default: PORT or 3001)"),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help="Logging level (default: LOG_LEVEL or INFO)"),
):
    """Run the completion proxy (POST /api/chat)."""
    settings = require_settings(console)
    level = log_level or settings.log_level
    setup_logging(level)

    bind_host = host or settings.host
    bind_port = port or settings.port
    console.print(f"[green]Eva backend starting on {bind_host}:{bind_port}[/green]")
    uvicorn.run(
        create_app(settings=settings),
        host=bind_host,
        port=bind_port,
        log_config=None,
        log_level=level.lower(),
    )


def _print_chats(store: ConversationStore) -> None:
    table = Table(title="Chats")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Title")
    table.add_column("Messages", justify="right")

    for i, chat in enumerate(store.chats, 1):
        marker = " [green]*[/green]" if chat.id == store.active_chat_id else ""
        table.add_row(str(i), f"{escape(chat.title)}{marker}", str(len(chat.messages)))

    console.print(table)


def _switch(store: ConversationStore, arg: str) -> None:
    chats = store.chats
    try:
        index = int(arg) - 1
        if not 0 <= index < len(chats):
            raise IndexError(arg)
        store.select_chat(chats[index].id)
    except (ValueError, IndexError, ChatNotFoundError):
        console.print(f"[red]No chat numbered {escape(repr(arg))}[/red]")
        return
    chat = store.active_chat()
    console.print(f"[dim]Switched to: {escape(chat.title)}[/dim]")
    for message in chat.messages:
        _print_message(message.sender, message.text)


def _print_message(sender: Sender, text: str) -> None:
    if sender is Sender.USER:
        console.print(f"[bold cyan]You:[/bold cyan] {escape(text)}")
    else:
        console.print(f"[bold magenta]Eva:[/bold magenta] {escape(text)}")


@app.command()
def chat(
    url: str | None = typer.Option(None, "--url", "-u", help="Proxy base URL (default: EVA_API_URL)"),
):
    """Chat with Eva in the terminal through the proxy.

    Input is read only after the previous reply arrives, so sends to one
    chat never overlap here.
    """
    async def _chat():
        store = ConversationStore()
        gateway = get_client_gateway(url, console)
        session = ChatSession(store, gateway)

        console.print("[bold magenta]Eva[/bold magenta] [dim]is listening.[/dim]")
        console.print(CHAT_HELP)

        async with gateway:
            while True:
                try:
                    text = console.input("[bold cyan]> [/bold cyan]")
                except (EOFError, KeyboardInterrupt):
                    console.print()
                    break

                command, _, arg = text.strip().partition(" ")
                if command == "/quit":
                    break
                if command == "/new":
                    store.create_chat()
                    console.print("[dim]Started a new chat.[/dim]")
                    continue
                if command == "/chats":
                    _print_chats(store)
                    continue
                if command == "/switch":
                    _switch(store, arg.strip())
                    continue

                try:
                    with console.status("[dim]Eva is typing...[/dim]"):
                        reply = await session.send(text)
                except InvalidInputError:
                    continue
                _print_message(Sender.ASSISTANT, reply.text)

    asyncio.run(_chat())


@app.command()
def ask(
    message: str = typer.Argument(..., help="What to say to Eva"),
    url: str | None = typer.Option(None, "--url", "-u", help="Proxy base URL (default: EVA_API_URL)"),
):
    """Send a single message and print the reply."""
    async def _ask():
        gateway = get_client_gateway(url, console)
        async with gateway:
            try:
                return await gateway.reply(message)
            except InvalidInputError:
                console.print("[red]Error: message must not be empty[/red]")
                raise typer.Exit(code=1)

    console.print(escape(asyncio.run(_ask())))


if __name__ == "__main__":
    app()
