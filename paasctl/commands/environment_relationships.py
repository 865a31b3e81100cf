"""paasctl CLI - Show an environment's relationships"""

import click
import yaml

from paasctl.base import ProjectCommand
from paasctl.commands.options import project_options, ssh_options


class EnvironmentRelationshipsCommand(ProjectCommand):
    """Show the service relationships of an environment."""

    def execute(self, refresh: bool = False) -> int:
        environment = self.select_environment()
        if environment is None:
            self.print_error("Could not determine the environment")
            self.print_dim("Use --environment, or check out a branch with an environment")
            return 1

        ssh_url = environment.get_ssh_url()
        relationships = self.ensure_relationships().get_relationships(ssh_url, refresh=refresh)

        if self.json_output:
            self.output_json(relationships)
        elif not relationships:
            self.print_warning(f"No relationships found for {environment.id}")
        else:
            print(yaml.safe_dump(relationships, default_flow_style=False), end="")
        return 0


@click.command(name="environment:relationships")
@click.option("--refresh", is_flag=True, help="Bypass the local relationships cache")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@project_options
@ssh_options
def environment_relationships(refresh, json_output, project, environment, identity_file, yes, verbose):
    """
    Show an environment's relationships
    """
    cmd = EnvironmentRelationshipsCommand(
        project_id=project,
        environment_id=environment,
        identity_file=identity_file,
        yes=yes,
        verbose=verbose,
        json_output=json_output,
    )
    cmd.run(refresh=refresh)
