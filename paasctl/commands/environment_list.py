"""paasctl CLI - List environments"""

import click
from rich.console import Console
from rich.table import Table

from paasctl.base import ProjectCommand
from paasctl.commands.options import project_options


class EnvironmentListCommand(ProjectCommand):
    """List a project's environments."""

    def execute(self, refresh: bool = False) -> int:
        project = self.get_selected_project()
        environments = sorted(
            self.ensure_api().get_environments(project, refresh=refresh).values(),
            key=lambda environment: environment.id,
        )

        if self.json_output:
            self.output_json(
                {"environments": [environment.to_dict() for environment in environments]}
            )
            return 0

        self.show_header(title="Environments", project=project.id)
        if not environments:
            self.print_warning("No environments found")
            return 0

        table = Table(show_header=True, header_style="bold cyan", padding=(0, 1))
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Status", style="green")
        table.add_column("Parent", style="dim")

        for environment in environments:
            table.add_row(
                environment.id,
                environment.title or environment.name or "-",
                environment.status,
                environment.parent or "-",
                style=None if environment.is_active else "dim",
            )

        Console().print(table)
        return 0


@click.command(name="environment:list")
@click.option("--refresh", is_flag=True, help="Bypass the local environment cache")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@project_options
def environment_list(refresh, json_output, project, environment, yes, verbose):
    """
    List environments

    \b
    Example:
      paasctl environments --refresh
    """
    cmd = EnvironmentListCommand(
        project_id=project,
        environment_id=environment,
        yes=yes,
        verbose=verbose,
        json_output=json_output,
    )
    cmd.run(refresh=refresh)
