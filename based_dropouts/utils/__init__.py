"""Utility helpers for the Based Dropouts site."""
