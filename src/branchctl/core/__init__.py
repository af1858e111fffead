"""Core runtime helpers shared by the branchctl CLI."""
