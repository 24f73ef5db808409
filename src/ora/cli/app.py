"""Main CLI application using Typer."""
import asyncio
import mimetypes
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..agent import (
    AgentPanel,
    CollaborationProgress,
    ConsentRequired,
    LinkOpened,
    MessageAdded,
    PanelEvent,
    read_resolver_state,
)
from ..collaboration import SequencerState
from ..conversation import FEELINGS, ConversationLog, Feedback
from ..intents import ConfigCategory, IntentResolver, UserTier, VideoTarget
from .providers import configure_logging, get_panel, get_store

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="ora",
    help="ORA chat panel: intent resolution, configuration and simulated multi-agent replies",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.callback()
def configure(
    ctx: typer.Context,
    log_level: str = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level (debug/info/warning/error). Defaults to ORA_LOG_LEVEL or warning."
    )
):
    """Configure logging for every command."""
    # chat shows records in its own log panel
    configure_logging(log_level, console=ctx.invoked_subcommand != "chat")


def _print_event(event: PanelEvent) -> None:
    """Render panel events for one-shot commands."""
    if isinstance(event, MessageAdded) and event.message.is_assistant:
        message = event.message
        title = "ORA"
        if message.is_multi_agent:
            title += " + " + ", ".join(agent.name for agent in message.collaborating_agents)
        console.print(Panel(message.content, title=title, border_style="cyan", expand=False))
    elif isinstance(event, CollaborationProgress) and event.state is not SequencerState.IDLE:
        names = ", ".join(f"{agent.avatar} {agent.name}" for agent in event.agents)
        console.print(f"[dim]{event.state.value}: {names}[/dim]")
    elif isinstance(event, LinkOpened):
        console.print(f"[cyan]{event.name}:[/cyan] {event.url}")
    elif isinstance(event, ConsentRequired):
        console.print(
            f"[yellow]You have asked {event.question_count} questions. "
            "Accept the user agreement in the chat panel to continue.[/yellow]"
        )


async def _run_with_panel(fast: bool, body) -> None:
    panel = get_panel(fast or None)
    panel.add_listener(_print_event)
    try:
        await panel.open()
        await body(panel)
        await panel.wait_idle()
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        await panel.close()


@app.command()
def chat(
    log_level: str = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show the log panel at this level (debug/info/warning/error)"
    )
):
    """Open the interactive chat panel."""
    from ..ui import run_textual_tui

    configure_logging(log_level or "debug", console=False)
    panel = get_panel()
    try:
        asyncio.run(run_textual_tui(panel, log_level=log_level))
    except KeyboardInterrupt:
        pass


@app.command()
def ask(
    text: str = typer.Argument(..., help="Message to send"),
    fast: bool = typer.Option(
        False,
        "--fast",
        "-f",
        help="Skip the simulated typing delays"
    )
):
    """Send one message and print the replies."""
    async def _ask(panel: AgentPanel):
        receipt = await panel.send(text)
        console.print(f"[dim]Matched rule: {receipt.rule} ({receipt.action.kind})[/dim]")

    if not text.strip():
        console.print("[red]Error: message is empty[/red]")
        raise typer.Exit(code=1)
    asyncio.run(_run_with_panel(fast, _ask))


@app.command()
def pill(
    category: str = typer.Argument(..., help="Pill button label, e.g. Leadership"),
    fast: bool = typer.Option(
        False,
        "--fast",
        "-f",
        help="Skip the simulated typing delays"
    )
):
    """Press a pill button and print the replies."""
    async def _pill(panel: AgentPanel):
        await panel.click_pill(category)
        console.print(f"[dim]Now playing: {panel.rotation.current}[/dim]")

    asyncio.run(_run_with_panel(fast, _pill))


@app.command()
def resolve(
    text: str = typer.Argument(..., help="Message to resolve"),
):
    """Show which rule handles a message and the reply, without storing anything."""
    async def _resolve():
        store = get_store()
        try:
            await store.connect()
            state = await read_resolver_state(store)
            rule, action = IntentResolver().explain(text, state)

            table = Table(show_header=False, box=None)
            table.add_column("Field", style="cyan")
            table.add_column("Value")
            table.add_row("Rule", rule)
            table.add_row("Action", action.kind)
            table.add_row("Context", action.context or "-")
            table.add_row("Tier", state.tier.value)
            table.add_row("Training package", "yes" if state.has_training_package else "no")
            console.print(table)
            console.print(Panel(action.text, title="Reply", border_style="cyan"))
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1) from e
        finally:
            await store.disconnect()

    asyncio.run(_resolve())


@app.command()
def rules():
    """Print the intent rules in priority order."""
    table = Table(title="Intent rules (first match wins)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Rule", style="cyan")
    for position, name in enumerate(IntentResolver().rule_names, start=1):
        table.add_row(str(position), name)
    console.print(table)


@app.command(name="config")
def show_config():
    """Show the stored panel configuration."""
    async def _config(panel: AgentPanel):
        config = panel.configuration
        table = Table(show_header=False, box=None)
        table.add_column("Setting", style="cyan")
        table.add_column("Value")
        for category in ConfigCategory:
            record = config.record(category)
            table.add_row(
                category.value.capitalize(),
                f"{record.name} ({record.url})" if record else "[dim]not set[/dim]",
            )
        table.add_row("Tier", config.tier.value)
        table.add_row("Training package", "active" if config.has_training_package else "no")
        table.add_row("Subscriber email", config.subscriber_email or "[dim]not set[/dim]")
        table.add_row("Persona videos", str(len(config.persona_video_urls)))
        table.add_row("Custom videos", str(len(config.custom_video_urls)))
        table.add_row("Training videos", str(len(config.training_video_urls)))
        console.print(Panel(table, title="ORA configuration", border_style="cyan"))

    asyncio.run(_run_with_panel(True, _config))


@app.command()
def tier(
    value: UserTier = typer.Argument(..., help="Subscription tier"),
):
    """Set the subscription tier."""
    async def _tier(panel: AgentPanel):
        await panel.set_tier(value)
        console.print(f"[green]Tier set to {value.value}[/green]")

    asyncio.run(_run_with_panel(True, _tier))


@app.command()
def logs(
    limit: int = typer.Option(
        10,
        "--limit",
        "-n",
        min=1,
        help="Number of most recent entries to show"
    )
):
    """Show the most recent conversation log entries."""
    async def _logs():
        store = get_store()
        try:
            await store.connect()
            entries = await ConversationLog(store).entries()
            if not entries:
                console.print("[dim]No conversations logged yet.[/dim]")
                return

            table = Table(title=f"Conversation log ({len(entries)} entries)")
            table.add_column("ID", style="dim", no_wrap=True)
            table.add_column("Time")
            table.add_column("Question")
            table.add_column("Context", style="cyan")
            table.add_column("Tier")
            table.add_column("Feedback")
            for entry in entries[-limit:]:
                table.add_row(
                    entry.id,
                    entry.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                    entry.user_question[:60],
                    entry.pill_button_context or "-",
                    entry.user_tier,
                    entry.feedback.value if entry.feedback else "-",
                )
            console.print(table)
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1) from e
        finally:
            await store.disconnect()

    asyncio.run(_logs())


@app.command()
def feedback(
    entry_id: str = typer.Argument(..., help="Conversation log entry id"),
    value: str = typer.Argument(..., help="up or down"),
):
    """Record thumbs up/down on a logged reply."""
    async def _feedback():
        store = get_store()
        try:
            await store.connect()
            if not await ConversationLog(store).update_feedback(entry_id, Feedback.parse(value)):
                raise ValueError(f"No conversation log entry {entry_id}")
            console.print(f"[green]Feedback recorded for {entry_id}[/green]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1) from e
        finally:
            await store.disconnect()

    asyncio.run(_feedback())


@app.command(name="upload-video")
def upload_video(
    target: VideoTarget = typer.Argument(..., help="Slot family"),
    slot: int = typer.Argument(..., help="Slot number, starting at 1"),
    file: Path = typer.Argument(
        ...,
        help="Video file to store",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    fast: bool = typer.Option(
        True,
        "--fast/--no-fast",
        help="Skip the simulated typing delays"
    )
):
    """Store a local video file in a persona or training slot."""
    async def _upload(panel: AgentPanel):
        panel.request_upload(target, slot - 1)
        content_type = mimetypes.guess_type(file.name)[0] or "application/octet-stream"
        await panel.upload_video(file.read_bytes(), content_type, file.name)

    asyncio.run(_run_with_panel(fast, _upload))


@app.command()
def checkin(
    feeling: str = typer.Argument(..., help="How you feel, e.g. Happy"),
    note: str = typer.Option(
        "",
        "--note",
        help="Anything else to share"
    )
):
    """Record a check-in."""
    async def _checkin(panel: AgentPanel):
        matches = [label for label in FEELINGS if label.lower() == feeling.strip().lower()]
        if not matches:
            raise ValueError(f"Unknown feeling '{feeling}'. Choose one of: {', '.join(FEELINGS)}")
        entry = await panel.check_in(matches[0], note)
        console.print(f"[green]Checked in as {entry.feeling} on {entry.date}[/green]")

    asyncio.run(_run_with_panel(True, _checkin))


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
