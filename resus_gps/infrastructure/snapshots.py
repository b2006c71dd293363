"""JSON boundary for primary-survey snapshots."""
import json
import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from resus_gps.domain.models import SurveySnapshot


logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """A snapshot document could not be read or failed validation."""


def load_snapshot(text: Union[str, bytes]) -> SurveySnapshot:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a JSON object")
    try:
        return SurveySnapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Snapshot failed validation ({e.error_count()} errors)") from e


def load_snapshot_file(path: Union[str, Path]) -> SurveySnapshot:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot file {path}: {e}") from e
    logger.debug("Loaded snapshot from %s", path)
    return load_snapshot(text)


def snapshot_to_json(snapshot: SurveySnapshot, indent: int = 2) -> str:
    return snapshot.model_dump_json(indent=indent, exclude_none=True)
