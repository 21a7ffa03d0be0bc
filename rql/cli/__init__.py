"""Command-line interface for parsing and inspecting query strings."""
