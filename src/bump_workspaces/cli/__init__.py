"""Command-line interface for bump-workspaces."""
