# -*- coding: utf-8 -*-
"""Meal plans: output models, generation orchestrator and HTTP endpoints."""
