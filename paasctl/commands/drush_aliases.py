"""paasctl CLI - Generate Drush site aliases"""

from typing import Optional

import click

from paasctl.base import ProjectCommand
from paasctl.commands.options import project_options
from paasctl.services.drush import DrushService


class DrushAliasesCommand(ProjectCommand):
    """Write Drush aliases for the project's environments."""

    def __init__(self, drush: Optional[DrushService] = None, **kwargs):
        super().__init__(**kwargs)
        self.drush = drush

    def ensure_drush(self) -> DrushService:
        if self.drush is None:
            self.drush = DrushService(self.config, self.ensure_shell(), self.ensure_local_project())
        return self.drush

    def execute(self, group: Optional[str] = None) -> int:
        project_root = self.require_project_root()
        project = self.get_selected_project()
        logger = self.init_logger(project.id, "drush-aliases")
        drush = self.ensure_drush()
        drush.ensure_installed()

        current_group = drush.get_alias_group(project, project_root)
        original_group = None
        if group and group != current_group:
            original_group = current_group
            self.ensure_local_project().write_project_config(project_root, {"alias-group": group})

        version = drush.get_version()
        self.show_header(
            title="Drush aliases",
            project=project.id,
            details={
                "Alias group": group or current_group,
                "Drush version": version or "unknown",
            },
        )

        if logger:
            logger.step("Generating Drush aliases")
        environments = list(self.ensure_api().get_environments(project).values())
        if not drush.create_aliases(project, project_root, environments, original_group):
            self.print_error("Failed to write Drush aliases")
            return 1
        if logger:
            logger.success("Aliases written")

        aliases = drush.get_aliases(group or current_group)
        if isinstance(aliases, str):
            self.console.print(aliases, markup=False, highlight=False)
        return 0


@click.command(name="local:drush-aliases")
@click.option("--group", "-g", help="Set a new alias group name")
@project_options
def local_drush_aliases(group, project, environment, yes, verbose):
    """
    Generate Drush aliases for the project

    \b
    Example:
      paasctl drush-aliases --group=mysite
    """
    cmd = DrushAliasesCommand(
        project_id=project,
        environment_id=environment,
        yes=yes,
        verbose=verbose,
    )
    cmd.run(group=group)
