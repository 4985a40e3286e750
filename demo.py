"""
End-to-end demo script to showcase the detection workflow.

Creates a small tree with duplicate files, scans it, and shows where each
selected copy would be placed in quarantine. Nothing is moved.
"""

import shutil
from pathlib import Path
from tempfile import TemporaryDirectory

from rich.console import Console

from dup_manager.core.detector import DuplicateFinder
from dup_manager.core.quarantine import QuarantineManager
from dup_manager.utils.config import Config


def create_demo_files(demo_dir: Path) -> None:
    """
    Create sample files for demonstration.

    Args:
        demo_dir: Directory to create files in
    """
    print(f"Creating demo files in: {demo_dir}")

    originals_dir = demo_dir / "originals"
    originals_dir.mkdir(exist_ok=True)
    (originals_dir / "report.txt").write_text("Quarterly report\n" * 200)
    (originals_dir / "notes.txt").write_text("Meeting notes\n" * 50)
    (originals_dir / "draft.txt").write_text("Meeting notez\n" * 50)  # same size as notes

    backup_dir = demo_dir / "backup" / "2024"
    backup_dir.mkdir(parents=True, exist_ok=True)
    shutil.copy(originals_dir / "report.txt", backup_dir / "report.txt")
    shutil.copy(originals_dir / "notes.txt", backup_dir / "notes-copy.txt")
    shutil.copy(originals_dir / "report.txt", demo_dir / "report (1).txt")

    # Never scanned
    hidden_dir = demo_dir / ".cache"
    hidden_dir.mkdir(exist_ok=True)
    shutil.copy(originals_dir / "report.txt", hidden_dir / "report.txt")


def main() -> None:
    console = Console()

    with TemporaryDirectory() as tmpdir:
        demo_dir = Path(tmpdir)
        create_demo_files(demo_dir)

        config = Config()
        # Keep the quarantine folder inside the demo directory
        quarantine = QuarantineManager(config, volume_root_resolver=lambda p: demo_dir)
        finder = DuplicateFinder(config, quarantine, show_progress=False)

        result = finder.find_duplicates([demo_dir])

        console.print(f"\n[green]Files scanned:[/green] {result.files_scanned}")
        console.print(f"[green]Files with same size:[/green] {result.candidates}")
        console.print(f"[bold]#Duplication cases: {len(result.groups)}[/bold]\n")

        for number, group in enumerate(result.groups, 1):
            console.print(f"[cyan]Case {number}[/cyan] sha256: {group.digest}")
            for index, path in enumerate(group.paths):
                console.print(f"  {index} -> {path.relative_to(demo_dir)}")
            for path in group.paths[1:]:
                destination = quarantine.destination_for(path)
                console.print(
                    f"  [dim]would move {path.relative_to(demo_dir)} to "
                    f"{destination.relative_to(demo_dir)}[/dim]"
                )
            console.print()


if __name__ == "__main__":
    main()
