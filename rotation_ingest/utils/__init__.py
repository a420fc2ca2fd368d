"""Shared helpers for :mod:`rotation_ingest`."""
