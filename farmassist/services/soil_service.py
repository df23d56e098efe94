"""
Farmer Assistant — Soil Evaluation Service
────────────────────────────────────────────
Classifies each tracked soil nutrient as LOW / OPTIMAL / HIGH against a fixed
agronomic reference range and attaches the matching advisory text.

Both bounds of a reference range are inclusive: a reading equal to `low` or
`high` is OPTIMAL.
"""

import logging
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple

from pydantic import ValidationError

from farmassist.models.schemas import (
    NutrientStatus, NutrientVerdict, SoilReport, SoilSample,
)

logger = logging.getLogger("farmassist.soil")


class ReferenceRange(NamedTuple):
    low:  float
    high: float


class Advisory(NamedTuple):
    low:     str
    high:    str
    optimal: str


class MalformedInput(ValueError):
    """The soil sample is missing a nutrient or carries a non-numeric one."""


# ─── REFERENCE TABLES ─────────────────────────────────────────────────────────

NUTRIENT_KEYS: tuple[str, ...] = (
    "nitrogen", "phosphorus", "potassium", "sulfur", "organic_matter", "ph",
)

REFERENCE_RANGES: Mapping[str, ReferenceRange] = MappingProxyType({
    "nitrogen":       ReferenceRange(80, 120),
    "phosphorus":     ReferenceRange(20, 40),
    "potassium":      ReferenceRange(100, 150),
    "sulfur":         ReferenceRange(10, 20),
    "organic_matter": ReferenceRange(1.5, 3.0),
    "ph":             ReferenceRange(6.0, 7.5),
})

ADVISORIES: Mapping[str, Advisory] = MappingProxyType({
    "nitrogen": Advisory(
        low="Add compost or urea fertilizer.",
        high="Avoid nitrogen fertilizers for 2–3 weeks.",
        optimal="Nitrogen level is perfect.",
    ),
    "phosphorus": Advisory(
        low="Add phosphate fertilizer.",
        high="Avoid phosphorus fertilizers.",
        optimal="Phosphorus level is perfect.",
    ),
    "potassium": Advisory(
        low="Add potash or banana compost.",
        high="Avoid potash fertilizers.",
        optimal="Potassium level is perfect.",
    ),
    "sulfur": Advisory(
        low="Add gypsum or sulfur fertilizer.",
        high="Reduce sulfur-based fertilizers.",
        optimal="Sulfur level is perfect.",
    ),
    "organic_matter": Advisory(
        low="Add cow dung, compost, or vermicompost.",
        high="Organic matter is excellent.",
        optimal="Organic matter level is good.",
    ),
    "ph": Advisory(
        low="Add lime to reduce acidity.",
        high="Add sulfur to reduce alkalinity.",
        optimal="pH is optimal.",
    ),
})


# ─── CLASSIFICATION ───────────────────────────────────────────────────────────

def classify_nutrient(key: str, value: float) -> NutrientVerdict:
    """Return the verdict for one nutrient reading. Raises KeyError for an untracked key."""
    low, high = REFERENCE_RANGES[key]
    advisory = ADVISORIES[key]

    if value < low:
        return NutrientVerdict(status=NutrientStatus.LOW, value=value, suggestion=advisory.low)
    if value > high:
        return NutrientVerdict(status=NutrientStatus.HIGH, value=value, suggestion=advisory.high)
    return NutrientVerdict(status=NutrientStatus.OPTIMAL, value=value, suggestion=advisory.optimal)


def evaluate_sample(sample: SoilSample) -> SoilReport:
    """Classify all tracked nutrients of an already-parsed sample."""
    analysis = {key: classify_nutrient(key, getattr(sample, key)) for key in NUTRIENT_KEYS}

    logger.debug(
        "Soil evaluated: crop=%s, %s",
        sample.crop,
        ", ".join(f"{k}={v.status.value}" for k, v in analysis.items()),
    )
    return SoilReport(crop=sample.crop, soil_type=sample.soil_type, analysis=analysis)


def _describe_errors(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"]) or "sample"
        problems.append(f"{field}: {err['msg']}")
    return "; ".join(problems)


def analyze_soil(payload: Mapping[str, Any]) -> SoilReport:
    """
    Public entry point. Parse a raw record (typically a decoded JSON body)
    and evaluate it.

    Raises MalformedInput when the payload is not a mapping, or when any
    tracked nutrient is missing, null, or not convertible to a finite number.
    Unrelated extra keys are ignored.
    """
    if not isinstance(payload, Mapping):
        raise MalformedInput("Soil sample must be a JSON object.")

    try:
        sample = SoilSample.model_validate(dict(payload))
    except ValidationError as e:
        raise MalformedInput(f"Invalid soil sample: {_describe_errors(e)}") from e

    return evaluate_sample(sample)
