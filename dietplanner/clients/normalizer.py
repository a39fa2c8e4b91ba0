# -*- coding: utf-8 -*-
"""Turn a raw client record into a well-formed ClientProfile.

Records come from storage collaborators in whatever shape they were entered,
so every field is coerced leniently. Nothing here raises: a value that cannot
be used is dropped (and logged) and left for the calculators to default.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .models import HEIGHT_RANGE_CM, WEIGHT_RANGE_KG, ActivityLevel, ClientProfile, Gender

logger = logging.getLogger(__name__)

_NUM_RE = re.compile(r"-?\d+(?:\.\d+)?")
_TAG_SPLIT_RE = re.compile(r"[,;\n]+")
_MALE_WORDS = {"male", "m", "man", "erkek"}

# Accepted spellings for each profile field, first match wins.
_ALIASES: Dict[str, List[str]] = {
    "client_id": ["client_id", "clientId", "id", "_id"],
    "name": ["name", "full_name", "fullName"],
    "gender": ["gender", "sex"],
    "birth_date": ["birth_date", "birthDate", "date_of_birth", "dob"],
    "height_cm": ["height_cm", "heightCm", "height"],
    "weight_kg": ["weight_kg", "weightKg", "current_weight", "currentWeight", "startingWeight", "weight"],
    "target_weight_kg": ["target_weight_kg", "targetWeightKg", "target_weight", "targetWeight"],
    "activity_level": ["activity_level", "activityLevel", "activity"],
    "medical_conditions": ["medical_conditions", "medicalConditions", "medical_history", "medicalHistory"],
    "dietary_restrictions": ["dietary_restrictions", "dietaryRestrictions", "restrictions"],
}


def _first_present(obj: Mapping[str, Any], keys: List[str]) -> Any:
    for k in keys:
        if k in obj and obj.get(k) is not None:
            return obj.get(k)
    return None


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        # Decimal comma ("72,5 kg") is common in hand-entered records.
        m = _NUM_RE.search(s.replace(",", "."))
        if not m:
            return None
        value = m.group(0)
    elif not isinstance(value, (int, float)):
        return None
    try:
        f = float(value)
    except (OverflowError, ValueError):
        return None
    return f if math.isfinite(f) else None


def _in_range(value: Optional[float], bounds: Tuple[float, float], field: str) -> Optional[float]:
    if value is None:
        return None
    low, high = bounds
    if low <= value <= high:
        return value
    logger.debug("dropping %s=%s outside [%s, %s]", field, value, low, high)
    return None


def _coerce_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        # "1990-05-01", "1990-05-01T00:00:00.000Z" and friends.
        try:
            return date.fromisoformat(s[:10])
        except ValueError:
            logger.debug("dropping unparsable birth date %r", value)
            return None
    logger.debug("dropping birth date of type %s", type(value).__name__)
    return None


def _coerce_gender(value: Any) -> Gender:
    s = str(value or "").strip().lower()
    return Gender.male if s in _MALE_WORDS else Gender.female


def _coerce_activity(value: Any) -> ActivityLevel:
    s = str(value or "").strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return ActivityLevel(s)
    except ValueError:
        if s:
            logger.debug("unknown activity level %r, using moderate", value)
        return ActivityLevel.moderate


def _as_tag_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        parts = _TAG_SPLIT_RE.split(value)
    elif isinstance(value, (list, tuple, set, frozenset)):
        parts = [x if isinstance(x, str) else str(x) for x in value if x is not None]
    else:
        parts = [str(value)]
    out: List[str] = []
    seen = set()
    for part in parts:
        s = part.strip()
        if s and s.lower() not in seen:
            seen.add(s.lower())
            out.append(s)
    return out


def normalize_profile(raw: Mapping[str, Any], client_id: Optional[str] = None) -> ClientProfile:
    """Best-effort conversion of a raw record; never raises.

    ``client_id`` wins over any id found inside the record, since callers
    already resolved the record through it.
    """
    if not isinstance(raw, Mapping):
        logger.warning("client record is %s, not a mapping; using an empty profile", type(raw).__name__)
        raw = {}

    def pick(field: str) -> Any:
        return _first_present(raw, _ALIASES[field])

    name = pick("name")
    name = str(name).strip() if name is not None else ""
    resolved_id = client_id if client_id is not None else pick("client_id")

    return ClientProfile(
        client_id=str(resolved_id or ""),
        name=name or None,
        gender=_coerce_gender(pick("gender")),
        birth_date=_coerce_date(pick("birth_date")),
        height_cm=_in_range(_coerce_float(pick("height_cm")), HEIGHT_RANGE_CM, "height_cm"),
        weight_kg=_in_range(_coerce_float(pick("weight_kg")), WEIGHT_RANGE_KG, "weight_kg"),
        target_weight_kg=_in_range(
            _coerce_float(pick("target_weight_kg")), WEIGHT_RANGE_KG, "target_weight_kg"
        ),
        activity_level=_coerce_activity(pick("activity_level")),
        medical_conditions=_as_tag_list(pick("medical_conditions")),
        dietary_restrictions=_as_tag_list(pick("dietary_restrictions")),
    )
