"""Application layer - ports connecting the domain to adapters."""

from __future__ import annotations
