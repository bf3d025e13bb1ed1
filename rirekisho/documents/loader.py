"""Personal record loading from YAML or JSON files."""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from rirekisho.documents.models import PersonalRecord


def load_record(path: Path | str) -> PersonalRecord:
    """Load and validate a personal record from YAML or JSON.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a mapping in a known format.
        pydantic.ValidationError: If the data does not match the record.
    """
    record_path = Path(path)
    if not record_path.exists():
        raise FileNotFoundError(f"Record not found: {record_path}")

    suffix = record_path.suffix.lower()
    if suffix == ".json":
        data = _load_json(record_path)
    else:
        data = _load_yaml(record_path)

    return PersonalRecord.model_validate(data)


def _load_yaml(path: Path) -> dict:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML record: {path}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Record must be a mapping/dict: {path}")
    return data


def _load_json(path: Path) -> dict:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON record: {path}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Record must be a mapping/dict: {path}")
    return data
