import json
import logging
import os
from typing import Any, Dict, List

import pandas as pd

from src.utils.io import load_json, save_json

logger = logging.getLogger(__name__)


def _coerce_jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _coerce_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_coerce_jsonable(v) for v in value]
    if hasattr(value, "tolist"):
        # numpy arrays and scalars coming back from parquet
        return _coerce_jsonable(value.tolist())
    return value


def load_bank_records(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads rated puzzle records from a file. Handles .parquet, .json and .jsonl.
    A .json file may hold a list of records, a single record, or an object
    keyed by difficulty whose values are lists of records.
    Returns a list of raw record dictionaries.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    def _normalize_record(record: Dict[str, Any], difficulty: Any = None) -> Dict[str, Any]:
        record = _coerce_jsonable(record)
        if difficulty and not record.get("difficulty"):
            record["difficulty"] = difficulty
        if not record.get("gridSize") and isinstance(record.get("regions"), list):
            record["gridSize"] = len(record["regions"])
        return record

    def _is_record(value: Any) -> bool:
        return isinstance(value, dict) and "regions" in value and "solution" in value

    # Case 1: Parquet File (Binary)
    if file_path.endswith(".parquet"):
        df = pd.read_parquet(file_path)
        records = df.to_dict(orient="records")
        return [_normalize_record(r) for r in records]

    # Case 2: JSON File (array, record, or difficulty buckets)
    if file_path.endswith(".json"):
        payload = load_json(file_path)
        if isinstance(payload, list):
            return [_normalize_record(p) for p in payload if _is_record(p)]
        if _is_record(payload):
            return [_normalize_record(payload)]
        if isinstance(payload, dict):
            data = []
            for difficulty, bucket in payload.items():
                if not isinstance(bucket, list):
                    continue
                data.extend(_normalize_record(p, difficulty) for p in bucket if _is_record(p))
            return data
        return []

    # Case 3: JSONL File (Text)
    data = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                logger.warning(f"Skipping unreadable line {line_no} in {file_path}")
                continue
            if _is_record(obj):
                data.append(_normalize_record(obj))
    return data


def write_bank_records(records: List[Dict[str, Any]], file_path: str) -> None:
    """Write records as .parquet, .jsonl or .json depending on the suffix."""
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    if file_path.endswith(".parquet"):
        pd.DataFrame(records).to_parquet(file_path, index=False)
        return

    if file_path.endswith(".jsonl"):
        with open(file_path, "w", encoding="utf-8") as f:
            for record in records:
                f.write(json.dumps(record, separators=(",", ":")) + "\n")
        return

    save_json(file_path, records)
