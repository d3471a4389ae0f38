"""Command-line runner for one-shot customer imports."""
