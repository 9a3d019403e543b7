"""candidacy command line entry point."""

import click

from src.common.logging import setup_logging
from src.interfaces.cli.commands.candidate_commands import CandidateCommands


@click.group()
@click.option("--log-level", default=None, help="ログレベル（例: DEBUG, INFO）")
def cli(log_level: str | None = None):
    """候補者の参照・いいね・ロック・非表示を操作するCLI"""
    setup_logging(level=log_level)


for command in CandidateCommands().get_commands():
    cli.add_command(command)


def main():
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
