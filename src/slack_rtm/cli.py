"""Example bot: connects over RTM and greets #general."""

import logging

import click
from rich.console import Console
from rich.table import Table

from slack_rtm.client import RtmClient
from slack_rtm.errors import SlackError
from slack_rtm.events import Event, Hello
from slack_rtm.rtm.handler import EventHandler
from slack_rtm.rtm.session import RtmSession

logger = logging.getLogger(__name__)


class GreetingHandler(EventHandler):
    """Logs every event and says hello in a channel once the server greets us."""

    def __init__(self, channel: str) -> None:
        self._channel = channel

    def on_connect(self, session: RtmSession) -> None:
        logger.info("Connected as %s", session.roster.self_data.name)

    def on_event(self, session: RtmSession, event: Event | SlackError, raw: str) -> None:
        if isinstance(event, SlackError):
            logger.warning("Undecodable frame %s: %s", raw, event)
            return
        logger.info("Event %s", type(event).__name__)
        if isinstance(event, Hello):
            session.send_message(self._channel, "Hello world! (rtm)")

    def on_close(self, session: RtmSession) -> None:
        logger.info("Server closed the connection")


def _print_roster(client: RtmClient) -> None:
    team = client.get_team()
    table = Table(show_header=True, header_style="bold", title=team.name if team else None)
    table.add_column("kind", style="cyan", no_wrap=True)
    table.add_column("count", justify="right")
    table.add_column("names")
    for kind, names in (
        ("users", [user.name for user in client.get_users()]),
        ("channels", [f"#{channel.name}" for channel in client.get_channels()]),
        ("groups", [group.name for group in client.get_groups()]),
        ("bots", [bot.name for bot in client.get_bots()]),
    ):
        table.add_row(kind, str(len(names)), ", ".join(sorted(names)))

    console = Console(stderr=True)
    console.print(table)


@click.command()
@click.option(
    "--token",
    envvar="SLACK_BOT_TOKEN",
    required=True,
    help="Bot token (xoxb-...); defaults to $SLACK_BOT_TOKEN",
)
@click.option(
    "--channel",
    default="#general",
    show_default=True,
    help="Channel id or #name to greet",
)
@click.option("--verbose", "-v", is_flag=True, help="Log frames and Web API calls")
def main(token: str, channel: str, verbose: bool) -> None:
    """Log in over RTM, greet a channel and log events until the server closes.

    Classic Slack apps only; RTM is not available to granular bot tokens.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    client = RtmClient(token)
    try:
        session = client.login()
        _print_roster(client)
        client.run(session, GreetingHandler(channel))
    except SlackError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    main()
