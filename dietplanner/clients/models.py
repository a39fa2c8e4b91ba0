# -*- coding: utf-8 -*-
"""Client profile models.

A profile is read-only input to the planner. Range checks live in the
normalizer, which drops bad values instead of rejecting the record.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    male = "male"
    female = "female"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    active = "active"
    very_active = "very_active"


HEIGHT_RANGE_CM = (50.0, 250.0)
WEIGHT_RANGE_KG = (20.0, 300.0)


class ClientProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    client_id: str
    name: Optional[str] = None
    gender: Gender = Gender.female
    birth_date: Optional[date] = None
    height_cm: Optional[float] = Field(None, gt=0)
    weight_kg: Optional[float] = Field(None, gt=0)
    target_weight_kg: Optional[float] = Field(None, gt=0)
    activity_level: ActivityLevel = ActivityLevel.moderate
    medical_conditions: List[str] = Field(default_factory=list, description="Free-text medical tags")
    dietary_restrictions: List[str] = Field(default_factory=list, description="Free-text dietary tags")
