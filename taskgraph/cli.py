"""
CLI interface for the task dependency engine.

Works on dependency and duration CSV files: computes the critical path,
audits stored dependencies for cycles, and adds guarded dependencies.
"""

import argparse
import logging
import sys
from pathlib import Path

from .analysis.critical_path import analyze_critical_path, print_critical_path_report
from .config.settings import settings
from .cpm.engine import CPMEngine
from .cpm.errors import DependencyError
from .cpm.models import DependencyType
from .cpm.store import DependencyStore
from .data_loader import load_dependencies, load_durations, save_dependencies, save_schedule
from .schemas import SchemaValidationError
from .utils.logger import configure_logging

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the taskgraph package."""
    package_logger = configure_logging('taskgraph')
    if verbose:
        package_logger.setLevel(logging.DEBUG)


def cmd_schedule(args: argparse.Namespace) -> int:
    store = load_dependencies(args.dependencies)
    durations = load_durations(args.durations)

    result = analyze_critical_path(store, durations, args.near_critical_days)
    print_critical_path_report(result)

    if args.output:
        nodes = CPMEngine(store).calculate_critical_path(durations)
        save_schedule(nodes, args.output)
        print(f"\nSchedule written to {args.output}")

    return 0


def cmd_cycles(args: argparse.Namespace) -> int:
    store = load_dependencies(args.dependencies)
    cycles = store.detect_cycles()

    if not cycles:
        print("No circular dependencies found")
        return 0

    print(f"Found {len(cycles)} circular dependency chain(s):")
    for i, cycle in enumerate(cycles, 1):
        print(f"  {i}. {' -> '.join(cycle + cycle[:1])}")
    return 1


def cmd_add(args: argparse.Namespace) -> int:
    path = args.dependencies
    store = load_dependencies(path) if path.exists() else DependencyStore()

    dep_id = store.create_dependency(
        args.from_task,
        args.to_task,
        DependencyType.from_value(args.type),
        args.user or settings.DEFAULT_USER,
    )
    save_dependencies(store, path)
    print(f"Created {dep_id}")
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    store = load_dependencies(args.dependencies)
    stats = store.get_statistics()

    print(f"Dependencies: {stats['total_dependencies']}")
    print(f"Tasks: {stats['total_tasks']}")
    print(f"Scheduling dependencies: {stats['scheduling_dependencies']}")
    for dep_type, count in sorted(stats['by_type'].items()):
        print(f"  {dep_type:12s}: {count}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskgraph",
        description="Task dependency graphs and critical path scheduling",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Critical path report, with schedule export
  taskgraph schedule dependencies.csv durations.csv --output schedule.csv

  # Audit imported dependencies for cycles
  taskgraph cycles dependencies.csv

  # Add a guarded dependency
  taskgraph add dependencies.csv design build --type blocks --user alice
""",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    schedule = subparsers.add_parser("schedule", help="Compute the critical path")
    schedule.add_argument("dependencies", type=Path, help="Dependencies CSV")
    schedule.add_argument("durations", type=Path, help="Task durations CSV")
    schedule.add_argument(
        "--output",
        type=Path,
        help="Write per-task CPM values to this CSV",
    )
    schedule.add_argument(
        "--near-critical-days",
        type=float,
        default=settings.NEAR_CRITICAL_DAYS,
        help=f"Slack threshold for near-critical tasks (default: {settings.NEAR_CRITICAL_DAYS:g})",
    )
    schedule.set_defaults(func=cmd_schedule)

    cycles = subparsers.add_parser("cycles", help="Detect circular Blocks dependencies")
    cycles.add_argument("dependencies", type=Path, help="Dependencies CSV")
    cycles.set_defaults(func=cmd_cycles)

    add = subparsers.add_parser("add", help="Add a dependency (cycle checked)")
    add.add_argument("dependencies", type=Path, help="Dependencies CSV (created if missing)")
    add.add_argument("from_task", help="Source task ID")
    add.add_argument("to_task", help="Target task ID")
    add.add_argument(
        "--type",
        default=DependencyType.BLOCKS.value,
        choices=[t.value for t in DependencyType],
        help="Dependency type (default: blocks)",
    )
    add.add_argument("--user", help=f"Created by (default: {settings.DEFAULT_USER})")
    add.set_defaults(func=cmd_add)

    stats = subparsers.add_parser("stats", help="Show dependency statistics")
    stats.add_argument("dependencies", type=Path, help="Dependencies CSV")
    stats.set_defaults(func=cmd_stats)

    return parser


def main(argv: list[str] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        return args.func(args)
    except (DependencyError, SchemaValidationError) as e:
        logger.error(str(e))
        return 1
    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
