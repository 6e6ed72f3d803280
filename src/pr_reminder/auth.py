"""GitHub client construction and authentication helpers."""

from github import Auth, Github, GithubException

from .models import Settings

AUTH_HINT = "Authentication failed. Check your GitHub token."


def get_github_client(settings: Settings) -> Github:
    """
    Create a GitHub client for the configured token.

    Without a token the client is unauthenticated; the GraphQL API then
    rejects the first query with a 401.

    Args:
        settings: Runtime settings holding the token

    Returns:
        Github client
    """
    if settings.token:
        return Github(auth=Auth.Token(settings.token))
    return Github()


def is_authentication_error(error: BaseException) -> bool:
    """Check whether an error is an HTTP 401 from GitHub."""
    return isinstance(error, GithubException) and error.status == 401


def error_message(error: BaseException) -> str:
    """Extract a readable message from a GitHub error."""
    if isinstance(error, GithubException) and isinstance(error.data, dict):
        if error.data.get("message"):
            return error.data["message"]
        errors = error.data.get("errors") or []
        if errors and isinstance(errors[0], dict) and errors[0].get("message"):
            return errors[0]["message"]
    return str(error)
