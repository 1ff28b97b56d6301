#!/usr/bin/env python3
"""CLI interface for the Support Triage Agent."""

import asyncio
import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from triage_agent import (
    ActionTemplater,
    AnalysisOrchestrator,
    CorrectionTracker,
    HistoryRecorder,
    JsonStore,
    ReviewSession,
    SeedSlot,
    SessionState,
    TriageError,
    UrgencyScorer,
    build_categorizer,
    load_config,
)

console = Console()

URGENCY_STYLE = {"High": "bold red", "Medium": "bold yellow", "Low": "bold green"}


def _build_session(config, categorizer=None, use_seed: bool = True) -> ReviewSession:
    """Wire providers, store and recorder into a fresh review session.

    With use_seed=False the seed slot is left for a later run.
    """
    store = JsonStore(config.history.path)
    templater = ActionTemplater(config.templates, config.default_template)
    orchestrator = AnalysisOrchestrator(
        categorizer=categorizer or build_categorizer(config),
        scorer=UrgencyScorer(config.urgency.rules, config.urgency.default_level),
        templater=templater,
    )
    return ReviewSession(
        orchestrator=orchestrator,
        recorder=HistoryRecorder(store, config.history.key),
        tracker=CorrectionTracker(config.categories, config.urgencies),
        seed=SeedSlot(store, config.history.seed_key) if use_seed else None,
    )


def _show_result(session: ReviewSession) -> None:
    """Render the current result with AI-match markers."""
    result = session.result
    flags = session.flags
    saved = session.state is SessionState.SAVED

    match = " [blue]✨ AI Match[/]"
    urgency_style = URGENCY_STYLE.get(result.urgency, "bold")
    body = (
        f"[bold]Category:[/] {result.category}{match if flags.category_matches else ''}\n"
        f"[bold]Urgency:[/]  [{urgency_style}]{result.urgency}[/]{match if flags.urgency_matches else ''}\n\n"
        f"[bold]Recommended Action:[/]\n{result.recommended_action}"
    )
    console.print(Panel(
        body,
        title="Analysis Saved" if saved else "Review & Edit Analysis",
        border_style="green" if saved else "blue",
    ))
    if result.reasoning:
        console.print(Panel(Markdown(result.reasoning), title="AI Reasoning", border_style="dim"))


def _choose(options: list[str], suggested, prompt: str) -> str:
    """Numbered option picker; the AI suggestion is marked."""
    for idx, option in enumerate(options, 1):
        hint = " ✨ (AI Suggested)" if option == suggested else ""
        console.print(f"  [cyan]{idx}[/]. {option}{hint}")
    choice = click.prompt(prompt, type=click.IntRange(1, len(options)))
    return options[choice - 1]


def _review_loop(session: ReviewSession, config) -> None:
    """Interactive review until the result is saved, cleared or abandoned."""
    actions = {
        "c": "change category",
        "u": "change urgency",
        "e": "edit action",
        "a": "add quick action",
        "s": "save",
        "x": "clear",
        "q": "quit without saving",
    }
    while session.state is SessionState.REVIEWING:
        _show_result(session)
        console.print("  ".join(f"[cyan]{k}[/]={v}" for k, v in actions.items()))
        key = click.prompt("Action", type=click.Choice(list(actions)), show_choices=False)

        if key == "c":
            session.edit_category(_choose(
                session.category_options, session.original.category, "Category"
            ))
        elif key == "u":
            session.edit_urgency(_choose(
                session.urgency_options, session.original.urgency, "Urgency"
            ))
        elif key == "e":
            edited = click.edit(session.result.recommended_action)
            if edited is not None:
                session.edit_action(edited.rstrip("\n"))
        elif key == "a":
            labels = [qa.label for qa in config.quick_actions]
            label = _choose(labels, None, "Quick action")
            session.append_quick_action(config.quick_actions[labels.index(label)].text)
        elif key == "s":
            try:
                session.save()
            except TriageError as e:
                console.print(f"[red]Error:[/] {e}. The analysis is still open, try saving again.")
                continue
            _show_result(session)
            console.print("[green]✓ Saved to history[/]")
            console.print(Panel(session.export_text(), title="Copy Results", border_style="dim"))
        elif key == "x":
            session.clear()
            console.print("[dim]Cleared.[/]")
        else:
            console.print("[yellow]Discarded without saving.[/]")
            return


@click.group()
@click.option("--config", "-c", default="config.yaml", help="Path to config file")
@click.option("--log-level", default=None, help="Logging level (default: LOG_LEVEL or WARNING)")
@click.pass_context
def cli(ctx, config, log_level):
    """Support Triage Agent - Categorize, prioritize and answer customer messages."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    try:
        ctx.obj["config"] = load_config(config)
    except TriageError as e:
        raise click.ClickException(str(e))

    logging.basicConfig(
        level=(log_level or ctx.obj["config"].log_level).upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@cli.command()
@click.argument("message", required=False)
@click.pass_context
def analyze(ctx, message):
    """Analyze a customer message and review the suggestions."""
    config = ctx.obj["config"]

    try:
        # An explicit message supersedes the seed; leave the seed in place
        session = _build_session(config, use_seed=not message)
    except TriageError as e:
        console.print(f"[red]Error:[/] {e}")
        return

    if message:
        session.set_message(message)
    elif session.message:
        console.print(f"[dim]Using seeded message ({session.message_length} characters)[/]")
    else:
        session.set_message(click.prompt("Customer message"))

    try:
        with console.status("Analyzing..."):
            asyncio.run(session.analyze())
    except TriageError as e:
        console.print(f"[red]Error:[/] {e}")
        return

    _review_loop(session, config)


@cli.command()
@click.argument("message")
@click.pass_context
def seed(ctx, message):
    """Pre-fill the message for the next analyze run."""
    config = ctx.obj["config"]
    try:
        SeedSlot(JsonStore(config.history.path), config.history.seed_key).offer(message)
    except TriageError as e:
        console.print(f"[red]Error:[/] {e}")
        return
    console.print("[green]✓ Message seeded for the next analysis[/]")


@cli.command()
@click.option("--limit", "-n", default=20, type=click.IntRange(min=1), help="Show the most recent N records")
@click.pass_context
def history(ctx, limit):
    """Show saved triage records and how often suggestions were corrected."""
    config = ctx.obj["config"]
    try:
        records = HistoryRecorder(JsonStore(config.history.path), config.history.key).load()
    except TriageError as e:
        console.print(f"[red]Error:[/] {e}")
        return

    if not records:
        console.print("[dim]No saved records yet.[/]")
        return

    table = Table(title=f"Triage History ({len(records)} records)")
    table.add_column("Saved", style="dim")
    table.add_column("Message", style="white", max_width=40)
    table.add_column("Category", style="cyan")
    table.add_column("Urgency")
    table.add_column("Corrected", style="yellow")

    for record in records[-limit:]:
        corrected = [
            name for name, flag in (
                ("category", record.category_corrected),
                ("urgency", record.urgency_corrected),
            ) if flag
        ]
        table.add_row(
            record.timestamp[:19],
            record.message[:40],
            record.category,
            f"[{URGENCY_STYLE.get(record.urgency, 'bold')}]{record.urgency}[/]",
            ", ".join(corrected) or "-",
        )
    console.print(table)

    tracked = [r for r in records if r.category_corrected is not None]
    if tracked:
        category_rate = sum(1 for r in tracked if r.category_corrected) / len(tracked)
        urgency_rate = sum(1 for r in tracked if r.urgency_corrected) / len(tracked)
        console.print(
            f"\nCorrection rate over {len(tracked)} tracked record(s): "
            f"category [bold]{category_rate:.0%}[/], urgency [bold]{urgency_rate:.0%}[/]"
        )


@cli.command()
@click.pass_context
def test(ctx):
    """Show the effective configuration."""
    config = ctx.obj["config"]

    console.print(Panel.fit("[bold]Configuration Test[/]", title="Test Mode"))

    console.print("\n[bold]Categorizer:[/]")
    if config.provider.ollama_model:
        console.print(f"  Ollama: {config.provider.ollama_model} @ {config.provider.ollama_host or 'default host'}")
    else:
        console.print(f"  Gemini: {config.provider.gemini_model}")
    console.print(f"  API Key: {'[green]SET[/]' if config.provider.gemini_api_key else '[red]NOT SET[/]'}")

    console.print(f"\n[bold]Categories ({len(config.categories)}):[/]")
    for category in config.categories:
        has_template = "✓" if category in config.templates else "default"
        console.print(f"  • {category} (template: {has_template})")

    console.print(f"\n[bold]Urgency rules ({len(config.urgency.rules)}):[/]")
    for rule in config.urgency.rules:
        console.print(f"  • {rule.level}: {len(rule.keywords)} keyword(s)")
    console.print(f"  Default: {config.urgency.default_level}")

    console.print("\n[bold]History:[/]")
    console.print(f"  File: {config.history.path} (key: {config.history.key})")


if __name__ == "__main__":
    cli()
