"""
Interactive review of duplicate groups.

Shows each group with numbered members, asks which copies to quarantine,
asks for confirmation and hands the confirmed selection to the
QuarantineManager.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, TextIO

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from dup_manager.core.models import DuplicateGroup, RelocationResult
from dup_manager.core.quarantine import QuarantineManager

logger = logging.getLogger(__name__)

_INDEX_SEPARATORS = re.compile(r"[,\s]+")


def parse_path_list(text: str) -> List[str]:
    """
    Split a comma-separated list of paths.

    Surrounding whitespace is trimmed and empty entries are dropped.
    """
    return [item.strip() for item in text.split(",") if item.strip()]


def parse_index_list(text: str, count: int) -> List[int]:
    """
    Parse member indices separated by commas and/or whitespace.

    Args:
        text: Raw operator input
        count: Number of members in the group

    Returns:
        Distinct indices in the order entered (may be empty)

    Raises:
        ValueError: If a token is not an integer in range(count)
    """
    indices: List[int] = []
    for token in _INDEX_SEPARATORS.split(text.strip()):
        if not token:
            continue
        try:
            index = int(token)
        except ValueError:
            raise ValueError(f"Not a row number: {token!r}") from None
        if not 0 <= index < count:
            raise ValueError(f"Row number out of range: {index} (0-{count - 1})")
        if index not in indices:
            indices.append(index)
    return indices


class ReviewDecision(Enum):
    """How the review of a group ended."""

    CONFIRMED = "confirmed"
    DECLINED = "declined"
    SKIPPED = "skipped"  # nothing selected


@dataclass
class GroupOutcome:
    """Result of reviewing one duplicate group."""

    group: DuplicateGroup
    selected: List[int]
    decision: ReviewDecision
    results: List[RelocationResult] = field(default_factory=list)


class ReviewUI:
    """Terminal-based review interface using Rich."""

    def __init__(self, console: Optional[Console] = None, stream: Optional[TextIO] = None):
        """
        Initialize review UI.

        Args:
            console: Rich console instance (creates new one if None)
            stream: Optional input stream to read answers from instead of stdin
        """
        self.console = console or Console()
        self.stream = stream

    def _ask(self, prompt: str) -> str:
        return self.console.input(prompt, stream=self.stream).strip()

    def show_startup_notice(self) -> None:
        self.console.print(
            "\n[yellow]If you want to include online-only files in the process, "
            "please download them first.[/yellow]"
        )

    def prompt_roots(self) -> List[Path]:
        """
        Ask for the directories to scan until every entry exists.

        Returns:
            Validated, non-empty list of directories
        """
        while True:
            answer = self._ask(
                "\nEnter directories to include, separated by commas "
                "(e.g. C:\\Folder1, D:\\, /home/me/Pictures): "
            )
            entries = parse_path_list(answer)
            if not entries:
                self.console.print("[red]Enter at least one directory.[/red]")
                continue

            missing = [entry for entry in entries if not os.path.isdir(entry)]
            if missing:
                for entry in missing:
                    self.console.print(f"[red]Not exist:[/red] {escape(entry)}")
                continue

            return [Path(os.path.abspath(entry)) for entry in entries]

    def show_group(self, group: DuplicateGroup, number: int, total: int) -> None:
        """Print the members of a group with their zero-based row numbers."""
        table = Table(
            title=f"Case {number}/{total}",
            caption=f"sha256: {group.digest}",
            box=box.ROUNDED,
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("#", style="dim", justify="right")
        table.add_column("File", style="cyan")
        table.add_column("Size", justify="right")

        for index, path in enumerate(group.paths):
            table.add_row(str(index), escape(str(path)), f"{group.size:,} B")

        self.console.print()
        self.console.print(table)

    def prompt_selection(self, group: DuplicateGroup) -> List[int]:
        """
        Ask which members to quarantine until the answer parses.

        Returns:
            Selected row numbers (empty if the operator entered nothing)
        """
        while True:
            answer = self._ask(
                "\nEnter the row numbers to remove, separated by commas "
                "(empty to keep all): "
            )
            try:
                return parse_index_list(answer, len(group.paths))
            except ValueError as e:
                self.console.print(f"[red]{escape(str(e))}[/red]")

    def confirm(self, paths: List[Path]) -> bool:
        """
        List the files about to be moved and ask for a yes/no answer.

        Returns:
            True if the operator confirmed
        """
        self.console.print("\n[bold]Confirm moving the following files to quarantine:[/bold]")
        for path in paths:
            self.console.print(f"  {escape(str(path))}")
        return Confirm.ask(
            "Do you want to proceed with the action?",
            console=self.console,
            stream=self.stream,
        )

    def show_relocation(self, result: RelocationResult) -> None:
        if not result.relocated:
            self.console.print(f"[red]✗ {escape(result.error)}[/red]")
            return
        self.console.print(
            f"[green]✓ Moved[/green] {escape(str(result.source))} [dim]->[/dim] {escape(str(result.destination))}"
        )
        if not result.manifest_written:
            self.console.print(
                f"[yellow]⚠ Audit entry could not be written for {escape(str(result.source))}[/yellow]"
            )

    def review_group(
        self,
        group: DuplicateGroup,
        number: int,
        total: int,
        quarantine: QuarantineManager,
    ) -> GroupOutcome:
        """
        Review one group: show, select, confirm, then relocate.

        Args:
            group: Duplicate group to review
            number: 1-based position of the group
            total: Number of groups
            quarantine: Quarantine manager that performs the moves

        Returns:
            GroupOutcome describing what happened
        """
        self.show_group(group, number, total)

        selected = self.prompt_selection(group)
        if not selected:
            self.console.print("[dim]Nothing selected, group kept as is.[/dim]")
            logger.debug(f"Case {number}: nothing selected")
            return GroupOutcome(group, selected, ReviewDecision.SKIPPED)

        if len(selected) == len(group.paths):
            self.console.print(
                "[bold yellow]⚠ Every copy of this file is selected; "
                "none will remain in place.[/bold yellow]"
            )

        paths = [group.paths[index] for index in selected]
        if not self.confirm(paths):
            self.console.print("\n[yellow]Action canceled.[/yellow]")
            logger.debug(f"Case {number}: declined, rows {selected}")
            return GroupOutcome(group, selected, ReviewDecision.DECLINED)

        self.console.print("\n[green]Action confirmed.[/green]")
        logger.debug(f"Case {number}: confirmed, rows {selected}")
        results = quarantine.quarantine_files(paths)
        for result in results:
            self.show_relocation(result)

        return GroupOutcome(group, selected, ReviewDecision.CONFIRMED, results)

    def review_duplicates(
        self,
        groups: List[DuplicateGroup],
        quarantine: QuarantineManager,
    ) -> List[GroupOutcome]:
        """
        Review every duplicate group in ascending digest order.

        Args:
            groups: Confirmed duplicate groups
            quarantine: Quarantine manager that performs the moves

        Returns:
            One GroupOutcome per group
        """
        ordered = sorted(groups, key=lambda g: (g.digest, g.size))
        outcomes = []
        for number, group in enumerate(ordered, 1):
            outcomes.append(self.review_group(group, number, len(ordered), quarantine))
        return outcomes

    def show_summary(self, outcomes: List[GroupOutcome]) -> None:
        """Print totals for the whole review session."""
        results = [r for outcome in outcomes for r in outcome.results]
        moved = [r for r in results if r.relocated]
        failed = [r for r in results if not r.relocated]
        declined = sum(1 for o in outcomes if o.decision is ReviewDecision.DECLINED)
        freed = sum(o.group.size * sum(1 for r in o.results if r.relocated) for o in outcomes)

        summary = Table(show_header=False, box=None)
        summary.add_column("Metric", style="cyan")
        summary.add_column("Value", style="green")
        summary.add_row("Duplicate cases reviewed", str(len(outcomes)))
        summary.add_row("Cases declined", str(declined))
        summary.add_row("Files quarantined", str(len(moved)))
        summary.add_row("Files failed", str(len(failed)))
        summary.add_row("Space moved to quarantine", f"{freed / (1024 * 1024):.1f} MB")

        self.console.print()
        self.console.print(Panel(summary, title="Review Summary", box=box.DOUBLE))
