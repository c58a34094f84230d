"""Movement file loading.

Reads movements exported by the data source and validates them into
Movement models. Two formats are supported:

1) JSON
   Either a top-level array of movement objects, or an object with a
   ``movements`` array. Keys follow the Movement field names.

2) CSV
   One movement per row, with a header row using the Movement field names.
   Empty cells are treated as missing values.

Any invalid record aborts the load with a MovementsLoadError naming the
offending row.
"""

import csv
import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from cashe.core.exceptions import MovementsLoadError
from cashe.core.models import Movement

logger = logging.getLogger(__name__)

_movement_list = TypeAdapter(list[Movement])


def _read_json(path: Path) -> list[dict]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MovementsLoadError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(payload, dict):
        payload = payload.get("movements")
    if not isinstance(payload, list):
        raise MovementsLoadError(
            f"{path} must contain a list of movements or a 'movements' list"
        )
    return payload


def _read_csv(path: Path) -> list[dict]:
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        return [
            {key.strip(): value for key, value in row.items() if key and value not in ("", None)}
            for row in reader
        ]


def load_movements(path: Path | str) -> list[Movement]:
    """Load and validate movements from a JSON or CSV file.

    Args:
        path: Path to a .json or .csv file.

    Returns:
        Movements in file order.

    Raises:
        MovementsLoadError: If the file is missing, has an unsupported
            extension or contains invalid records.
    """
    path = Path(path)
    if not path.exists():
        raise MovementsLoadError(f"Movements file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        records = _read_json(path)
    elif suffix == ".csv":
        records = _read_csv(path)
    else:
        raise MovementsLoadError(f"Unsupported movements file type: {path.suffix}")

    try:
        movements = _movement_list.validate_python(records)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise MovementsLoadError(
            f"Invalid movement in {path} at {location}: {first['msg']}"
        ) from e

    logger.debug("Loaded %d movements from %s", len(movements), path)
    return movements
