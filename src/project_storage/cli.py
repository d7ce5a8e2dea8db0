from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from project_storage.models.storage import (
    ProjectNotFoundError,
    StorageReport,
    StoreUnavailableError,
)
from project_storage.services.storage import (
    count_required_storage,
    format_bytes,
    list_required_storage,
    total_projects_size,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="project-storage",
        description="Report the disk storage required by projects.",
    )
    parser.add_argument(
        "project_id",
        nargs="?",
        type=int,
        help="Project to report on. Without it, the total over all projects is shown.",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Show the storage of every project before the total.",
    )
    return parser


def _display_report(report: StorageReport) -> None:
    print(f"Project {report.project_id}: {format_bytes(report.total_bytes)}")
    for module, size in report.modules.items():
        print(f"  {module.label:<15} {format_bytes(size):>10}  ({size} bytes)")


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Print a storage report for one project, or the installation total.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = _build_parser().parse_args(argv)

    try:
        if args.project_id is not None:
            _display_report(count_required_storage(args.project_id))
            return 0

        if args.all:
            for report in list_required_storage():
                _display_report(report)
            print("-" * 40)

        total = total_projects_size()
    except ProjectNotFoundError as exc:
        print(f"❌ Error: {exc}")
        return 1
    except StoreUnavailableError as exc:
        print(f"❌ Database unavailable: {exc}")
        return 1

    print(f"Total required storage: {format_bytes(total)} ({total} bytes)")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the CLI application."""
    try:
        return run_cli(argv)
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user. Exiting.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
