"""Strongly typed identifiers for SSO domain entities."""

from typing import NewType

# Local forum user id (positive integer assigned by the user store)
UserId = NewType("UserId", int)
