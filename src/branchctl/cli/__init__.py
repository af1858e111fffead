"""Command-line entry point: argument parsing, preset dispatch and output."""
