"""Utility helpers for linkgnome (configuration and logging)."""
