"""Shared helpers for the HTTP API."""
