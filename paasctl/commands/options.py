"""Shared click options for project and SSH selection."""

import click


def project_options(func):
    """--project, --environment, --yes and --verbose."""
    func = click.option("--verbose", "-v", is_flag=True, help="Show all command output")(func)
    func = click.option("--yes", "-y", is_flag=True, help="Answer 'yes' to all prompts")(func)
    func = click.option("--environment", "-e", help="The environment ID")(func)
    func = click.option("--project", "-p", help="The project ID")(func)
    return func


def ssh_options(func):
    """SSH configuration shared by commands that connect to environments."""
    return click.option(
        "--identity-file", "-i", help="An SSH identity (private key) to use"
    )(func)
