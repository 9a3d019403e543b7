"""Base class for CLI command groups."""

from abc import ABC, abstractmethod

import click


class BaseCommand(ABC):
    """Base class for a set of click commands with shared output helpers."""

    @staticmethod
    def echo_info(message: str):
        """Show an info message"""
        click.echo(message)

    @staticmethod
    def echo_success(message: str):
        """Show a success message"""
        click.echo(click.style(f"✓ {message}", fg="green"))

    @staticmethod
    def echo_error(message: str):
        """Show an error message"""
        click.echo(click.style(f"✗ {message}", fg="red"), err=True)

    @abstractmethod
    def get_commands(self) -> list[click.Command]:
        """Get list of commands provided by this group"""
        pass
