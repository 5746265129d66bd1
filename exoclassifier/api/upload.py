"""
Upload parsing — turns a dashboard CSV/JSON upload into a feature mapping.

JSON uploads are an object keyed by feature name. CSV uploads carry a header
row (ignored) followed by a data row whose first nine cells are read in
FEATURE_NAMES order. Missing or unparseable values fall back to the
dashboard defaults.
"""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from exoclassifier.ml.classification.features import (
    FEATURE_DEFAULTS,
    FEATURE_NAMES,
    NUM_FEATURES,
    NotNumericError,
    coerce_value,
)

logger = logging.getLogger(__name__)

PARSE_FAILURE_MESSAGE = "Failed to parse file. Please check the format."
SUPPORTED_SUFFIXES = (".csv", ".json")


class UploadParseError(ValueError):
    """Upload could not be read as a feature file."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(PARSE_FAILURE_MESSAGE)


def _value_or_default(index: int, value: Any) -> float:
    name = FEATURE_NAMES[index]
    try:
        return coerce_value(index, value)
    except NotNumericError:
        return FEATURE_DEFAULTS[name]


def parse_json_features(text: str) -> Dict[str, float]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise UploadParseError(f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise UploadParseError("JSON upload must be an object keyed by feature name")

    return {
        name: _value_or_default(i, data.get(name))
        for i, name in enumerate(FEATURE_NAMES)
    }


def parse_csv_features(text: str) -> Dict[str, float]:
    try:
        # Only the first data row matters; the header line is skipped
        frame = pd.read_csv(
            io.StringIO(text), header=None, skiprows=1, nrows=1,
            dtype=str, keep_default_na=False,
        )
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        raise UploadParseError(f"invalid CSV: {exc}") from exc

    if frame.empty or frame.shape[1] < NUM_FEATURES:
        raise UploadParseError(
            f"CSV data row must have at least {NUM_FEATURES} values, got {frame.shape[1]}"
        )

    cells: List[str] = [str(cell).strip() for cell in frame.iloc[0, :NUM_FEATURES]]
    return {
        name: _value_or_default(i, cells[i])
        for i, name in enumerate(FEATURE_NAMES)
    }


def parse_upload(filename: Optional[str], content: bytes) -> Dict[str, float]:
    """
    Parse an uploaded feature file.

    Args:
        filename: Original file name; its suffix selects the parser.
        content: Raw file bytes (UTF-8, BOM tolerated).

    Returns:
        Mapping of every feature name to a float, in FEATURE_NAMES order.

    Raises:
        UploadParseError: unsupported suffix, undecodable bytes or malformed content.
    """
    suffix = Path(filename or "").suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UploadParseError(f"unsupported file type {suffix or '(none)'}")

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise UploadParseError("file is not UTF-8 text") from exc

    features = parse_json_features(text) if suffix == ".json" else parse_csv_features(text)
    logger.info("Parsed %s upload '%s' into %d features", suffix, filename, len(features))
    return features
