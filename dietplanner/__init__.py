# -*- coding: utf-8 -*-
"""Personalized calorie targets, macro splits and meal plans."""

__version__ = "0.1.0"
