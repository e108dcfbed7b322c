"""Terminal rendering of dashboard state."""
