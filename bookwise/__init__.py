"""Appointment scheduling core: slot availability, calendar blocks, and customer records."""

__version__ = "0.1.0"
