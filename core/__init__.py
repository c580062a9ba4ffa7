"""Core domain rules for the room wizard."""
