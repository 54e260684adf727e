"""Cleanup engine services and repository adapters."""
