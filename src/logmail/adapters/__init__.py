"""Adapters - email, logging, configuration and in-memory test doubles."""

from __future__ import annotations
