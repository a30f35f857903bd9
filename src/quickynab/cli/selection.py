"""CLI helpers for budget and account selection."""

from __future__ import annotations

from typing import Optional

import click

from quickynab.domain.errors import AmbiguousSelectionError
from quickynab.domain.upload import UploadService


def prompt_for_choice(error: AmbiguousSelectionError) -> str:
    """Let the user pick one of the enumerated choices; returns its ID."""
    click.echo(f"\nAvailable {error.kind}s:")
    for index, (_, label) in enumerate(error.choices, start=1):
        click.echo(f"  {index}. {label}")

    selection = click.prompt(
        f"\nSelect {error.kind} number",
        type=click.IntRange(1, len(error.choices)),
    )
    choice_id, label = error.choices[selection - 1]
    click.echo(f"Selected: {label}")
    return choice_id


def resolve_budget_or_prompt(service: UploadService, override: Optional[str] = None) -> str:
    """Resolve the budget, asking the user when several qualify."""
    try:
        return service.resolve_budget_id(override)
    except AmbiguousSelectionError as exc:
        return prompt_for_choice(exc)


def resolve_account_or_prompt(
    service: UploadService, budget_id: str, override: Optional[str] = None
) -> str:
    """Resolve the account, asking the user when several qualify."""
    try:
        return service.resolve_account_id(budget_id, override)
    except AmbiguousSelectionError as exc:
        return prompt_for_choice(exc)
