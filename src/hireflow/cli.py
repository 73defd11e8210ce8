"""Command-line interface for hireflow."""

import hmac
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from hireflow.config import settings
from hireflow.utils.logging import configure_logging

app = typer.Typer(
    name="hireflow",
    help="hireflow - résumé matching and automated application progression",
    add_completion=False,
)
console = Console()


@app.callback()
def main_callback() -> None:
    configure_logging()


def _read_resume(path: Path) -> str:
    from hireflow.jobs.application import decode_plain_text

    try:
        return decode_plain_text(path.read_bytes())
    except UnicodeDecodeError:
        console.print(f"⚠️  Could not read {path.name} as text, falling back to skills")
        return ""


@app.command()
def score(
    resume: Path = typer.Argument(..., exists=True, dir_okay=False, help="Plain-text résumé file"),
    description: str = typer.Option("", "--description", "-d", help="Job description"),
    skill: List[str] = typer.Option([], "--skill", "-s", help="Required skill (repeatable)"),
    provided_skill: List[str] = typer.Option(
        [], "--provided-skill", help="Applicant skill used when the résumé has no text (repeatable)"
    ),
    scorer: str = typer.Option(settings.default_scorer, help="Scorer strategy: tfidf or keyword"),
) -> None:
    """Score a résumé against a job description."""
    from hireflow.core.exceptions import UnknownScorerError
    from hireflow.jobs.matcher import get_scorer, score_with_fallback

    try:
        strategy = get_scorer(scorer)
    except UnknownScorerError as e:
        console.print(f"❌ {e}")
        raise typer.Exit(code=1)

    value = score_with_fallback(
        _read_resume(resume), description, skill, provided_skills=provided_skill, scorer=strategy
    )
    console.print(f"Match score ({strategy.name}): {value}")


@app.command("extract-skills")
def extract_skills_command(
    resume: Path = typer.Argument(..., exists=True, dir_okay=False, help="Plain-text résumé file"),
) -> None:
    """List catalog skills found in a résumé."""
    from hireflow.jobs.extractor import extract_skills

    skills = extract_skills(_read_resume(resume))
    if not skills:
        console.print("No known skills found")
        return
    for name in skills:
        console.print(f"• {name}")


@app.command("run-bot")
def run_bot(
    store_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Application store JSON file"),
    token: Optional[str] = typer.Option(None, "--token", help="Internal bot token for scheduled runs"),
) -> None:
    """Advance every pending technical application by one step."""
    from hireflow.automation.progression import run_progression_batch
    from hireflow.storage.store import ApplicationStore

    automated = False
    if token is not None:
        if not settings.bot_token or not hmac.compare_digest(token, settings.bot_token):
            console.print("❌ Invalid bot token")
            raise typer.Exit(code=1)
        automated = True

    store = ApplicationStore.load(store_path)
    result = run_progression_batch(None, automated, store=store)
    store.dump(store_path)

    table = Table(title="Bot Automation")
    table.add_column("Application", style="cyan")
    table.add_column("From")
    table.add_column("To", style="green")
    for transition in result.transitions:
        table.add_row(transition.id, transition.prev_status.value, transition.new_status.value)
    console.print(table)
    console.print(
        f"🤖 Updated {result.updated_count} applications "
        f"(skipped {result.skipped}, failed {result.failed})"
    )


@app.command()
def stats(
    store_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Application store JSON file"),
    window_hours: int = typer.Option(settings.stats_window_hours, help="Recent activity window in hours"),
) -> None:
    """Show bot statistics for technical applications."""
    from hireflow.automation.stats import build_bot_stats
    from hireflow.storage.store import ApplicationStore

    store = ApplicationStore.load(store_path)
    summary = build_bot_stats(store.list_applications(), window_hours=window_hours)

    table = Table(title="Technical Applications by Status")
    table.add_column("Status", style="cyan")
    table.add_column("Count", style="green")
    for status, count in sorted(summary.total_by_status.items()):
        table.add_row(status, str(count))
    console.print(table)

    activity = ", ".join(f"{source}={count}" for source, count in sorted(summary.recent_bot_activity.items()))
    console.print(f"Bot activity (last {summary.window_hours}h): {activity or 'none'}")
    console.print(f"Ready for processing: {summary.ready_for_processing}")


@app.command()
def config() -> None:
    """Show current configuration."""
    table = Table(title="hireflow Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    # Show non-sensitive settings
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Log Level", settings.log_level)
    table.add_row("Default Scorer", settings.default_scorer)
    table.add_row("Bot Token", "configured" if settings.bot_token else "not set")
    table.add_row("Reject Below", str(settings.bot_reject_below))
    table.add_row("Interview Min Score", str(settings.bot_interview_min_score))
    table.add_row("Offer Bias", str(settings.bot_offer_bias))
    table.add_row("Offer Cap", str(settings.bot_offer_cap))
    table.add_row("Stats Window (h)", str(settings.stats_window_hours))

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from hireflow import __version__
    console.print(f"hireflow v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
