"""CLI layer for quickynab application."""
