# -*- coding: utf-8 -*-
"""Errors raised by the planning engine and its collaborators."""

from __future__ import annotations


class ClientNotFoundError(LookupError):
    """The client identifier does not resolve to a stored record."""

    def __init__(self, client_id: str) -> None:
        super().__init__(f"Client not found: {client_id}")
        self.client_id = client_id


class AgentError(RuntimeError):
    """The generative model call failed (transport, HTTP status or payload)."""
