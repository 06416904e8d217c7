"""Shared utilities for writebook2md."""
