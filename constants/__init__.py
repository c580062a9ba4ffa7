"""Shared session and widget key constants."""
