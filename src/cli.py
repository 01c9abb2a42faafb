"""
Click CLI for the Zoom meeting links service.

Commands:
    serve           Run the FastAPI server with uvicorn
    create-meeting  Run the Server-to-Server flow once and print the links
"""

import json
import logging
import sys
from typing import Optional

import click

from src.oauth.exceptions import MissingCredentialsError, TokenExchangeError
from src.oauth.token_exchange import TokenExchanger
from src.server.config import settings
from src.server.services.meeting_service import MeetingService
from src.zoom.client import ZoomMeetingsClient
from src.zoom.exceptions import MeetingCreationError
from src.zoom.models import MeetingRequest, normalize_start_time

logger = logging.getLogger(__name__)


def print_error(message: str) -> None:
    """Print error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def print_success(message: str) -> None:
    """Print success message."""
    click.secho(message, fg="green")


def validate_start_time(ctx, param, value: Optional[str]) -> Optional[str]:
    """Reject a --start-time that is not ISO-8601."""
    try:
        return normalize_start_time(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Create Zoom meetings using Server-to-Server or user-level OAuth."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default: HOST setting)")
@click.option("--port", type=int, default=None, help="Port (default: PORT setting)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """
    Run the API server.

    Example: zoom-meetings serve --port 3000
    """
    import uvicorn

    uvicorn.run(
        "src.server.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="debug" if settings.debug else "info",
    )


@cli.command("create-meeting")
@click.option("--client-id", help="S2S app client ID")
@click.option("--client-secret", help="S2S app client secret")
@click.option("--account-id", help="Zoom account ID")
@click.option("--topic", default="Test Meeting", show_default=True, help="Meeting topic")
@click.option("--duration", type=click.IntRange(min=1), default=30, show_default=True,
              help="Meeting length in minutes")
@click.option("--start-time", callback=validate_start_time, help="Start time (ISO-8601)")
@click.option("--timezone", help="IANA timezone name")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def create_meeting(
    client_id: Optional[str],
    client_secret: Optional[str],
    account_id: Optional[str],
    topic: str,
    duration: int,
    start_time: Optional[str],
    timezone: Optional[str],
    as_json: bool,
) -> None:
    """
    Create a meeting with Server-to-Server credentials.

    Example: zoom-meetings create-meeting --topic "Standup" --duration 15
    """
    exchanger = TokenExchanger(
        token_url=settings.zoom_token_url, timeout=settings.http_timeout_seconds
    )
    service = MeetingService(
        exchanger,
        ZoomMeetingsClient(
            base_url=settings.zoom_api_base_url, timeout=settings.http_timeout_seconds
        ),
        s2s_fallback=settings.s2s_fallback(),
    )

    try:
        meeting = service.create_s2s_meeting(
            {
                "client_id": client_id,
                "client_secret": client_secret,
                "account_id": account_id,
            },
            MeetingRequest(
                topic=topic, duration=duration, start_time=start_time, timezone=timezone
            ),
        )
    except MissingCredentialsError as e:
        print_error(str(e))
        sys.exit(1)
    except (TokenExchangeError, MeetingCreationError) as e:
        print_error(f"{e.message} (status={e.status_code}): {e.detail}")
        sys.exit(1)

    result = meeting.to_dict("s2s")
    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    print_success(f"Created meeting {meeting.meeting_id}")
    click.echo(f"Password:  {meeting.password or '-'}")
    click.echo(f"Host link: {meeting.start_url}")
    click.echo(f"Join link: {meeting.join_url}")


if __name__ == "__main__":
    cli()
