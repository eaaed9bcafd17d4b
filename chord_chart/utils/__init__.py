"""Utility helpers for chord-chart."""
