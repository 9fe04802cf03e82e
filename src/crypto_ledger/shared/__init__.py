"""Shared models and enums used across layers."""
