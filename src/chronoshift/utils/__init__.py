"""Shared utilities for Chronoshift."""
