"""Configuration: compile options, settings, and logging."""
