"""Shared helpers for Bob CLI."""
