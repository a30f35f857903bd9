"""CLI commands for quickynab."""
