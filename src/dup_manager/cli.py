"""Command-line interface for dup-manager."""

import logging

import click
from rich.console import Console

from dup_manager import __version__
from dup_manager.core.detector import DuplicateFinder
from dup_manager.core.quarantine import QuarantineManager
from dup_manager.ui.review import ReviewUI
from dup_manager.utils.config import Config
from dup_manager.utils.logger import setup_logger

console = Console()
logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__, prog_name="dup-manager")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """
    Dup Manager - Find duplicate files and move unwanted copies into quarantine.

    Prompts for the directories to scan, groups files by size and SHA-256
    digest, then walks through every duplicate case. Selected copies are
    moved to a DeletionDuplicates folder at the root of their volume and
    recorded in its paths.txt audit log. Nothing is deleted.
    """
    setup_logger("dup_manager", level=logging.DEBUG if verbose else logging.INFO)

    config = Config()
    quarantine = QuarantineManager(config)
    review_ui = ReviewUI(console)

    console.print(f"\n[bold cyan]Dup Manager v{__version__}[/bold cyan] - Duplicate Detection")
    review_ui.show_startup_notice()

    roots = review_ui.prompt_roots()
    logger.debug(f"Selected roots: {', '.join(str(r) for r in roots)}")

    finder = DuplicateFinder(config, quarantine, show_progress=True)
    result = finder.find_duplicates(roots)

    console.print(f"\n[green]Files scanned:[/green] {result.files_scanned}")
    console.print(f"[green]Files with same size:[/green] {result.candidates}")
    console.print(f"\n[bold]#Duplication cases: {len(result.groups)}[/bold]")

    if not result.groups:
        console.print("[green]✓ No duplicates found![/green]")
        return

    outcomes = review_ui.review_duplicates(result.groups, quarantine)
    review_ui.show_summary(outcomes)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
