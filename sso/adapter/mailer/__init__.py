"""Validation email adapter."""

from .client import HttpValidationMailer, MockValidationMailer, SentEmail

__all__ = ["HttpValidationMailer", "MockValidationMailer", "SentEmail"]
