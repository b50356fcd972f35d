"""Workforce domain services."""
