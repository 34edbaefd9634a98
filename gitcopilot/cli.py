#!/usr/bin/env python3
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
import pyperclip
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .commit_message import CommitMessageGenerator
from .config import Config, default_config_path
from .core import ChangeAnalyzer, GitCommitter
from .exceptions import GitCopilotError
from .models import CommitMessage
from .observers import ConsoleLogObserver, FileLogObserver

console = Console()

SECRET_KEYS = ("api_key",)


def run_async(coro):
    """Run a coroutine to completion from the synchronous CLI."""
    return asyncio.run(coro)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def confirm_commit() -> bool:
    """Ask whether the generated message should be committed."""
    return click.confirm("Do you want to commit these changes?", default=True)


def _display_value(key: str, value) -> str:
    if value is None or value == "":
        return "None"
    if key in SECRET_KEYS:
        value = str(value)
        return value[:3] + "*" * max(len(value) - 3, 3)
    return str(value)


def print_commit_message(message: str) -> None:
    parsed = CommitMessage.parse(message)
    header_style = "bold green" if parsed.type else "bold"
    console.print(parsed.header, style=header_style, markup=False, highlight=False)
    body = parsed.text[len(parsed.header):].strip("\n")
    if body:
        console.print(body, markup=False, highlight=False)


def print_config(config: Config, config_path: Path) -> None:
    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path.exists():
        console.print(f"[dim]Config file: {escape(str(config_path))}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'Setting':<20} {'Value':<48} {'Source':<10}")
    console.print("-" * 78)
    for name in Config.model_fields:
        value = _display_value(name, getattr(config, name))
        source = config.field_source(name)
        console.print(f"{name:<20} {escape(value):<48} {source:<10}")

    console.print("\nTo modify a setting run: git-copilot --config KEY VALUE")


@click.command()
@click.version_option(__version__, prog_name="git-copilot")
@click.option(
    "-a", "--add", is_flag=True, help="Automatically add all changes to staging area"
)
@click.option(
    "-l",
    "--last",
    is_flag=True,
    help="Analyze the most recent commit instead of staged changes",
)
@click.option(
    "-c",
    "--commit",
    is_flag=True,
    help="Generate commit message and commit (requires confirmation by default)",
)
@click.option(
    "--auto",
    is_flag=True,
    help="When used with --commit, commit automatically without confirmation",
)
@click.option(
    "--no-verify",
    is_flag=True,
    help="Skip pre-commit hooks when creating commits",
)
@click.option(
    "--config",
    "config_item",
    nargs=2,
    type=(str, str),
    default=None,
    metavar="KEY VALUE",
    help="Set configuration item",
)
@click.option(
    "--config-list", is_flag=True, help="Display current configuration settings"
)
@click.option(
    "--config-dir",
    is_flag=True,
    help="Display the config file location and copy it to clipboard",
)
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "--api-key",
    envvar="DEEPSEEK_API_KEY",
    help="API key for the completion service (overrides config). Can also be set via DEEPSEEK_API_KEY.",
)
@click.option("--model", help="Model to use for this run (overrides config)")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def main(
    add: bool,
    last: bool,
    commit: bool,
    auto: bool,
    no_verify: bool,
    config_item: Optional[Tuple[str, str]],
    config_list: bool,
    config_dir: bool,
    path: Path,
    api_key: Optional[str],
    model: Optional[str],
    verbose: bool,
):
    """
    An AI-based Git commit assistant that analyzes your code changes and
    generates standardized commit messages.

    By default the staged changes are analyzed and a message is suggested.
    Use --commit to commit with it.
    """
    setup_logging(verbose)
    config_path = default_config_path()

    try:
        if config_item:
            key, value = config_item
            config = Config.load(config_path)
            config.set_value(key, value)
            config.save(config_path)
            shown = _display_value(key, getattr(config, key))
            console.print(
                f"[green]Configuration item {escape(key)} has been set to {escape(shown)}[/green]"
            )
            return

        if config_list:
            print_config(Config.load(config_path), config_path)
            return

        if config_dir:
            if not config_path.exists():
                Config().save(config_path)
                console.print(
                    "[yellow]Created new config file with default values[/yellow]"
                )
            console.print(f"[green]Config file location:[/green] {escape(str(config_path))}")
            try:
                pyperclip.copy(str(config_path))
                console.print("[green]Path copied to clipboard![/green]")
            except pyperclip.PyperclipException as e:
                console.print(f"[yellow]Could not copy to clipboard: {escape(str(e))}[/yellow]")
            return

        config = Config.load(config_path)
        if api_key:
            config.api_key = api_key
        if model:
            config.model = model

        if not config.api_key:
            console.print("[yellow]Please set the API key first:[/yellow]")
            console.print("[cyan]git-copilot --config api_key YOUR_API_KEY[/cyan]")
            sys.exit(1)

        analyzer = ChangeAnalyzer(str(path))
        if last:
            changes = analyzer.analyze_last_commit()
            console.print("[blue]Analyzing changes from the most recent commit:[/blue]")
        else:
            if add:
                console.print("[blue]Adding all changes to staging area...[/blue]")
            changes = analyzer.analyze_staged(stage_all=add)
            console.print("[blue]Analyzing current changes:[/blue]")

        console.print(f"[cyan]Added: {len(changes.added)} files[/cyan]")
        console.print(f"[cyan]Modified: {len(changes.modified)} files[/cyan]")
        console.print(f"[cyan]Deleted: {len(changes.deleted)} files[/cyan]")

        if changes.is_empty:
            console.print("[yellow]No changes detected[/yellow]")
            return

        console.print("[blue]Generating commit message...[/blue]")
        generator = CommitMessageGenerator(config)
        message = run_async(generator.generate(changes))
        console.print("[green]Generated commit message:[/green]")
        print_commit_message(message)

        if not commit:
            return
        if last:
            console.print(
                "[yellow]--commit is ignored with --last, the analyzed commit already exists[/yellow]"
            )
            return

        if not auto and not confirm_commit():
            console.print("[yellow]Commit canceled[/yellow]")
            return

        committer = GitCommitter(str(path), console=console, no_verify=no_verify)
        committer.add_observer(ConsoleLogObserver(console))
        log_file = config.get_log_file()
        if log_file:
            committer.add_observer(FileLogObserver(str(log_file)))

        run_async(committer.commit(message))
        if auto:
            console.print("[green]Changes automatically committed[/green]")
        else:
            console.print("[green]Changes committed[/green]")
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
    except GitCopilotError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()


if __name__ == "__main__":
    main()
