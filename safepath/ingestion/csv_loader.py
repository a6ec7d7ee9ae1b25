"""Raw incident CSV loading.

Reads every ``*.csv`` file in the raw data directory. Files carry a header
row followed by ``lat,lng,period,category,resolution`` columns.
"""

import csv
import logging
from pathlib import Path
from typing import Iterator, List

from pydantic import ValidationError as PydanticValidationError

from safepath.schemas.incident import RawIncident

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["lat", "lng", "period", "category", "resolution"]


def iter_csv_rows(path: Path) -> Iterator[dict]:
    """Yield non-blank data rows of one CSV file keyed by column name."""
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        next(reader, None)  # header
        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            yield dict(zip(CSV_COLUMNS, (cell.strip() for cell in row)))


def load_raw_incidents(raw_dir: str | Path) -> List[RawIncident]:
    """Load all incidents from the CSV files in a directory.

    Rows that cannot be turned into a RawIncident (missing columns,
    non-numeric coordinates) are logged and skipped, as are whole files that
    are not valid UTF-8.

    Args:
        raw_dir: Directory holding the raw CSV exports

    Returns:
        Parsed incidents in file-name then row order
    """
    raw_path = Path(raw_dir)
    files = sorted(raw_path.glob("*.csv"))
    if not files:
        logger.warning(f"No CSV files found in {raw_path}")

    incidents: List[RawIncident] = []
    skipped = 0

    for file_path in files:
        file_incidents: List[RawIncident] = []
        try:
            for record_no, row in enumerate(iter_csv_rows(file_path), start=1):
                try:
                    file_incidents.append(RawIncident.model_validate(row))
                except PydanticValidationError as e:
                    skipped += 1
                    logger.warning(
                        f"Skipping malformed record {record_no} in {file_path.name}: "
                        f"{e.error_count()} validation error(s)"
                    )
        except UnicodeDecodeError as e:
            logger.error(f"Skipping {file_path.name}: not valid UTF-8 ({e.reason})")
            continue

        incidents.extend(file_incidents)
        logger.info(f"Read {len(file_incidents)} incidents from {file_path.name}")

    if skipped:
        logger.warning(f"Skipped {skipped} malformed CSV rows")
    return incidents
