"""Shared-context currency endpoints and a Postgres-backed todo API."""

__version__ = "1.0.0"
