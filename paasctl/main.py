#!/usr/bin/env python3
"""paasctl CLI - Main entry point"""

import functools
import os
import sys

from rich.console import Console

import rich_click as click
from click.exceptions import ClickException, UsageError

from paasctl import __version__
from paasctl.commands.drush_aliases import local_drush_aliases
from paasctl.commands.environment_list import environment_list
from paasctl.commands.environment_push import environment_push
from paasctl.commands.environment_relationships import environment_relationships

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_ARGUMENT = "bold yellow"
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_METAVAR = "bold yellow"
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.STYLE_COMMANDS_PANEL_BORDER = "cyan"
click.rich_click.ERRORS_EPILOGUE = ""

console = Console(stderr=True)

# Short aliases for namespaced commands
COMMAND_ALIASES = {
    "push": "environment:push",
    "environments": "environment:list",
    "relationships": "environment:relationships",
    "drush-aliases": "local:drush-aliases",
}


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UsageError as e:
            console.print(f"\n[bold red]✗ Error:[/bold red] {e.format_message()}\n", highlight=False)
            if e.ctx and e.ctx.command:
                console.print(
                    f"[dim]Run[/dim] [cyan]paasctl {e.ctx.command.name} --help[/cyan] [dim]for usage information[/dim]\n"
                )
            sys.exit(1)
        except ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n", highlight=False)
            if os.environ.get("DEBUG") or os.environ.get("VERBOSE"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


class AliasedGroup(click.RichGroup):
    """Click group that also resolves short command aliases (e.g. 'push')."""

    def get_command(self, ctx, cmd_name):
        command = super().get_command(ctx, cmd_name)
        if command is not None:
            return command
        if cmd_name in COMMAND_ALIASES:
            return super().get_command(ctx, COMMAND_ALIASES[cmd_name])
        return None

    def resolve_command(self, ctx, args):
        # Report the canonical name even when invoked through an alias
        _, command, remaining = super().resolve_command(ctx, args)
        return command.name if command else None, command, remaining


@click.group(cls=AliasedGroup)
@click.version_option(version=__version__, prog_name="paasctl")
def cli() -> None:
    """
    paasctl - Command-line client for the platform.

    \b
    Quick Start:
      paasctl environments          # List environments
      paasctl push                  # Push the current branch
      paasctl push --activate       # Push and activate a new environment
      paasctl drush-aliases         # Generate Drush aliases
    """


cli.add_command(environment_push)
cli.add_command(environment_list)
cli.add_command(environment_relationships)
cli.add_command(local_drush_aliases)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli()


if __name__ == "__main__":
    main()
