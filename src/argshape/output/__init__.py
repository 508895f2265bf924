"""Output layer: Rich and JSON rendering of command results."""
