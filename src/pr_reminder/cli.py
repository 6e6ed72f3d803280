"""Command-line interface for pr-reminder."""

import locale
import logging

import click
from dotenv import load_dotenv

from .auth import AUTH_HINT, error_message, get_github_client, is_authentication_error
from .config import ORGANIZATION_ENV, TOKEN_ENV, load_settings
from .fetcher import find_approved_prs
from .report import print_report

load_dotenv()

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(verbose: bool, log_file: str | None) -> None:
    """Send progress to stderr, and everything to the log file if given."""
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    # PyGithub logs every request at DEBUG
    logging.getLogger("github").setLevel(logging.INFO)


def configure_locale() -> None:
    """Use the user's locale for report timestamps."""
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error as e:
        logger.debug(f"Could not set locale, using default: {e}")


@click.command()
@click.option("--token", envvar=TOKEN_ENV, help="GitHub Personal Access Token")
@click.option("--org", envvar=ORGANIZATION_ENV, help="Only search PRs in this organization")
@click.option("--log-file", type=click.Path(dir_okay=False, writable=True), help="Write a debug log to this file")
@click.option("--verbose", is_flag=True, help="Enable verbose logging")
def main(token: str | None, org: str | None, log_file: str | None, verbose: bool) -> None:
    """List your open PRs that are approved but not merged."""
    configure_logging(verbose, log_file)
    configure_locale()
    settings = load_settings(token=token, organization=org)

    try:
        client = get_github_client(settings)
        entries = find_approved_prs(client, settings)
    except Exception as e:
        logger.debug("Run failed", exc_info=True)
        click.echo(f"Error: {error_message(e)}", err=True)
        if is_authentication_error(e):
            click.echo(AUTH_HINT, err=True)
        return

    print_report(entries)


if __name__ == "__main__":
    main()
