"""
KOI Feature Vector — Fixed 9-feature input for candidate classification.

Each Kepler Object of Interest is described by nine physical parameters,
always in the same order:

    0. koi_period   Orbital period (days)
    1. koi_prad     Planet radius (Earth radii)
    2. koi_sma      Semi-major axis (AU)
    3. koi_incl     Inclination (degrees)
    4. koi_teq      Equilibrium temperature (K)
    5. koi_slogg    Stellar surface gravity (log g)
    6. koi_srad     Stellar radius (solar radii)
    7. koi_smass    Stellar mass (solar masses)
    8. koi_steff    Stellar effective temperature (K)

Raw caller input is checked and coerced by ``validate()`` before any scoring.

Author: Exoplanet Classifier Team
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Dict, Tuple


# -----------------------------------------------------------------------
# Feature metadata
# -----------------------------------------------------------------------

FEATURE_NAMES: Tuple[str, ...] = (
    "koi_period",
    "koi_prad",
    "koi_sma",
    "koi_incl",
    "koi_teq",
    "koi_slogg",
    "koi_srad",
    "koi_smass",
    "koi_steff",
)

NUM_FEATURES = len(FEATURE_NAMES)

FEATURE_LABELS: Dict[str, str] = {
    "koi_period": "Orbital Period (days)",
    "koi_prad": "Planet Radius (Earth radii)",
    "koi_sma": "Semi-major Axis (AU)",
    "koi_incl": "Inclination (degrees)",
    "koi_teq": "Equilibrium Temperature (K)",
    "koi_slogg": "Stellar Surface Gravity (log g)",
    "koi_srad": "Stellar Radius (solar radii)",
    "koi_smass": "Stellar Mass (solar masses)",
    "koi_steff": "Stellar Effective Temperature (K)",
}

# Values pre-filled in the dashboard form
FEATURE_DEFAULTS: Dict[str, float] = {
    "koi_period": 10.0,
    "koi_prad": 2.0,
    "koi_sma": 0.1,
    "koi_incl": 85.0,
    "koi_teq": 300.0,
    "koi_slogg": 4.5,
    "koi_srad": 1.0,
    "koi_smass": 1.0,
    "koi_steff": 5500.0,
}


# -----------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------

def _short_repr(value: Any, limit: int = 40) -> str:
    try:
        text = repr(value)
    except ValueError:
        # int repr beyond sys.get_int_max_str_digits()
        text = f"<{type(value).__name__} too large>"
    return text if len(text) <= limit else text[: limit - 3] + "..."


class FeatureValidationError(ValueError):
    """Raw input could not be turned into a FeatureVector."""
    kind = "invalid"


class ShapeError(FeatureValidationError):
    """Wrong number of feature values."""
    kind = "shape"

    def __init__(self, received: int | None = None):
        self.received = received
        super().__init__(f"Invalid input: Expected {NUM_FEATURES} features")


class NotNumericError(FeatureValidationError):
    """A feature value is not parseable as a finite number."""
    kind = "not_numeric"

    def __init__(self, index: int, value: Any):
        self.index = index
        self.feature = FEATURE_NAMES[index]
        self.value = value
        super().__init__(
            f"All features must be numeric values "
            f"({self.feature} at position {index}: {_short_repr(value)})"
        )


# -----------------------------------------------------------------------
# Feature vector
# -----------------------------------------------------------------------

@dataclass(frozen=True)
class FeatureVector:
    """Nine finite floats in FEATURE_NAMES order."""
    values: Tuple[float, ...]

    def __post_init__(self):
        if len(self.values) != NUM_FEATURES:
            raise ShapeError(len(self.values))

    def __getitem__(self, name: str) -> float:
        return self.values[FEATURE_NAMES.index(name)]

    def __iter__(self):
        return iter(self.values)

    def __len__(self) -> int:
        return NUM_FEATURES

    @property
    def koi_period(self) -> float:
        return self.values[0]

    @property
    def koi_prad(self) -> float:
        return self.values[1]

    @property
    def koi_teq(self) -> float:
        return self.values[4]

    def as_dict(self) -> Dict[str, float]:
        return dict(zip(FEATURE_NAMES, self.values))


# -----------------------------------------------------------------------
# Validator
# -----------------------------------------------------------------------

def coerce_value(index: int, value: Any) -> float:
    """Parse one feature value, raising NotNumericError if it is not a finite number."""
    # bool is an int subclass; "true" is not a measurement
    if value is None or isinstance(value, bool):
        raise NotNumericError(index, value)
    if isinstance(value, numbers.Real):
        try:
            number = float(value)
        except OverflowError:
            raise NotNumericError(index, value) from None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise NotNumericError(index, value) from None
    else:
        raise NotNumericError(index, value)

    if not math.isfinite(number):
        raise NotNumericError(index, value)
    return number


def validate(raw: Any) -> FeatureVector:
    """
    Check shape and numeric-ness of raw feature input.

    Args:
        raw: Sequence of 9 values, each a number or a numeric-looking string,
            in FEATURE_NAMES order.

    Returns:
        Immutable FeatureVector preserving input order.

    Raises:
        ShapeError: ``raw`` is not a sequence of exactly 9 elements.
        NotNumericError: an element is not a finite number.
    """
    if (
        raw is None
        or isinstance(raw, (str, bytes, Mapping))
        or not isinstance(raw, Sequence)
    ):
        raise ShapeError(None)
    if len(raw) != NUM_FEATURES:
        raise ShapeError(len(raw))

    return FeatureVector(tuple(coerce_value(i, v) for i, v in enumerate(raw)))
