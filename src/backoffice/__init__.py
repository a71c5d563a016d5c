"""Catering back office: admin dashboard API with page-level role permissions."""

__version__ = "0.1.0"
