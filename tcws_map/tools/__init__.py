"""Offline maintenance tools."""
