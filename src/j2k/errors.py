"""Base exception for j2k."""

from __future__ import annotations


class J2KError(Exception):
    """Base class for all j2k errors."""
