"""CLI commands for building the heatmap snapshot."""

import argparse
import logging
import sys

from safepath.config import get_settings
from safepath.core.exceptions import SafePathException
from safepath.ingestion.pipeline import process_crime_data
from safepath.repositories.snapshot_repository import SnapshotRepository

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


def process(raw_dir: str, output: str) -> None:
    """Score and aggregate raw CSV incidents into the heatmap snapshot.

    Args:
        raw_dir: Directory of raw CSV files
        output: Snapshot output path
    """
    try:
        logger.info(f"Processing raw incidents from {raw_dir}")
        count = process_crime_data(raw_dir, output)
        logger.info(f"Processing complete: {count} heatmap points")
    except (SafePathException, OSError) as e:
        logger.error(f"Error processing crime data: {str(e)}")
        sys.exit(1)


def inspect(path: str) -> None:
    """Print a summary of an existing snapshot.

    Args:
        path: Snapshot file to read
    """
    try:
        dataset = SnapshotRepository(path).load_dataset()
    except SafePathException as e:
        logger.error(f"Error reading snapshot: {e.message}")
        sys.exit(1)

    total_incidents = sum(point.count for point in dataset)
    print(f"Points: {len(dataset)}")
    print(f"Incidents: {total_incidents}")
    print(f"Categories: {', '.join(dataset.categories()) or '-'}")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="SafePath Heatmap Snapshot CLI")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    process_parser = subparsers.add_parser(
        "process", help="Build the heatmap snapshot from raw CSV files"
    )
    process_parser.add_argument(
        "--raw-dir", default=settings.RAW_DATA_DIR, help="Raw CSV directory"
    )
    process_parser.add_argument(
        "--output", default=settings.HEATMAP_DATA_PATH, help="Snapshot output path"
    )

    inspect_parser = subparsers.add_parser("inspect", help="Summarize a heatmap snapshot")
    inspect_parser.add_argument("--path", default=settings.HEATMAP_DATA_PATH, help="Snapshot path")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "process":
        process(args.raw_dir, args.output)
    elif args.command == "inspect":
        inspect(args.path)


if __name__ == "__main__":
    main()
