# -*- coding: utf-8 -*-
"""Client profiles: models, normalization and the read-only lookup store."""

from .models import ActivityLevel, ClientProfile, Gender
from .normalizer import normalize_profile

__all__ = [
    "ActivityLevel",
    "ClientProfile",
    "Gender",
    "normalize_profile",
]
