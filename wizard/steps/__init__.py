"""Step renderers for the room wizard."""
