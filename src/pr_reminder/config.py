"""Environment-sourced configuration."""

import os

from .models import Settings

TOKEN_ENV = "GITHUB_TOKEN"
ORGANIZATION_ENV = "ORGANIZATION"


def load_settings(token: str | None = None, organization: str | None = None) -> Settings:
    """
    Build settings from explicit values, falling back to the environment.

    Empty strings are treated as unset. The token is not validated here;
    a missing or bad token shows up as a 401 from the API.

    Args:
        token: GitHub Personal Access Token
        organization: Organization to restrict the search to

    Returns:
        Settings for this run
    """
    if not token:
        token = os.environ.get(TOKEN_ENV)
    if not organization:
        organization = os.environ.get(ORGANIZATION_ENV)

    return Settings(token=token or None, organization=organization or None)
