"""Client factory functions."""

from quickynab.config import Settings, require_access_token
from quickynab.ynab.http_client import YnabHttpClient


def create_ynab_client(settings: Settings) -> YnabHttpClient:
    """Create an HTTP client for the YNAB API.

    Args:
        settings: Loaded settings; the access token must be present

    Returns:
        YnabHttpClient instance

    Raises:
        ConfigError: If no access token is configured
    """
    return YnabHttpClient(
        access_token=require_access_token(settings),
        base_url=settings.ynab_api_base,
        timeout=settings.api_timeout,
    )
