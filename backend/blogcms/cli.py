import click
from flask import Flask

from blogcms.application.posts.scheduling import promote_due_posts


def register_cli(app: Flask) -> None:
    @app.cli.command("promote-scheduled")
    def promote_scheduled():
        """Publish every SCHEDULED post whose publish time has passed."""
        count = promote_due_posts()
        click.echo(f"Promoted {count} scheduled post(s)")
