"""
Farmer Assistant — Pydantic Models
All request/response shapes are defined here.
"""

import math
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ─── ENUMS ───────────────────────────────────────────────────────────────────

class NutrientStatus(str, Enum):
    LOW     = "LOW"
    HIGH    = "HIGH"
    OPTIMAL = "OPTIMAL"


# ─── REQUEST ─────────────────────────────────────────────────────────────────

class SoilSample(BaseModel):
    """
    One soil test. Nutrient fields accept numbers or numeric strings;
    crop and soil_type are carried through untouched.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    crop:           Any   = Field(None, examples=["tomato"])
    soil_type:      Any   = Field(None, examples=["loamy"])
    nitrogen:       float = Field(..., examples=[100], description="Available N (kg/ha)")
    phosphorus:     float = Field(..., examples=[30],  description="Available P (kg/ha)")
    potassium:      float = Field(..., examples=[125], description="Available K (kg/ha)")
    sulfur:         float = Field(..., examples=[15],  description="Available S (ppm)")
    organic_matter: float = Field(..., examples=[2.0], description="Organic matter (%)")
    ph:             float = Field(..., examples=[6.8], description="Soil pH")

    @field_validator(
        "nitrogen", "phosphorus", "potassium", "sulfur", "organic_matter", "ph",
        mode="before",
    )
    @classmethod
    def numeric_only(cls, v):
        # bool is an int subclass; "true" or True is never a reading
        if isinstance(v, bool):
            raise ValueError("must be a number, not a boolean")
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("must not be empty")
            # float() allows digit separators ("1_000"); lab readings never use them
            if "_" in v:
                raise ValueError("must be a plain number")
        return v

    @field_validator(
        "nitrogen", "phosphorus", "potassium", "sulfur", "organic_matter", "ph",
    )
    @classmethod
    def finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("must be a finite number")
        return v


# ─── RESPONSE ────────────────────────────────────────────────────────────────

class NutrientVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    status:     NutrientStatus = Field(..., examples=["OPTIMAL"])
    value:      float
    suggestion: str            = Field(..., examples=["Nitrogen level is perfect."])


class SoilReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    crop:      Any = None
    soil_type: Any = None
    analysis:  Dict[str, NutrientVerdict] = Field(
        ..., description="One verdict per tracked nutrient key"
    )


class HealthResponse(BaseModel):
    status:    str = Field(..., examples=["ok"])
    service:   str
    version:   str
    timestamp: str


class ErrorResponse(BaseModel):
    error:   str
    detail:  Optional[str] = None
    code:    int
