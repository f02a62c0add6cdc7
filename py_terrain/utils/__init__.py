"""Shared numeric and colour helpers."""
