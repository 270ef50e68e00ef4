"""Shared utilities: logging, enumerations, constants and class factories."""
