"""paasctl CLI - Push code to an environment"""

from typing import List, Optional

import click

from paasctl.base import ProjectCommand
from paasctl.commands.options import project_options, ssh_options
from paasctl.constants import GIT_PUSH_FLAGS
from paasctl.exceptions import EnvironmentStateError
from paasctl.models.platform import Activity, Environment, Project


class EnvironmentPushCommand(ProjectCommand):
    """Push a Git ref to an environment, optionally activating it."""

    def execute(
        self,
        source: str = "HEAD",
        force: bool = False,
        force_with_lease: bool = False,
        dry_run: bool = False,
        no_wait: bool = False,
        activate: bool = False,
        parent: Optional[str] = None,
    ) -> int:
        """
        Execute push command.

        Returns:
            Exit code
        """
        # A colon would make the refspec ambiguous
        if ":" in source:
            self.print_error(f"Invalid ref: {source}")
            return 1

        project_root = self.require_project_root()
        project = self.get_selected_project()
        logger = self.init_logger(project.id, "environment-push")
        self.ensure_git().set_default_repository_dir(project_root)
        self.select_environment()

        target = self._resolve_target(project_root)
        if target is None:
            self.print_error("Could not determine target environment name.")
            return 1

        self.show_header(
            title="Push code",
            project=project.id,
            environment=target,
            details={"Source": source},
        )

        production_branch = self.config.get("detection.production_branch")
        if target == production_branch and not self.confirm(
            f"Are you sure you want to push to the [yellow]{production_branch}[/yellow] (production) branch?"
        ):
            return 1

        # Activation only makes sense for a missing or inactive environment
        api = self.ensure_api()
        should_activate = False
        target_environment = api.get_environment(target, project)
        if target_environment is None or not target_environment.is_active:
            should_activate = activate or self.confirm("Activate the environment after pushing?")

        parent_id = production_branch
        if should_activate:
            parent_id = parent or self.ask_input(
                "Parent environment",
                default=production_branch,
                choices=api.get_environments(project).keys(),
            )
            if api.get_environment(parent_id, project) is None:
                self.print_error(f"Parent environment not found: [bold]{parent_id}[/bold]")
                return 1

        self.ensure_local_project().ensure_git_remote(project_root, project.git_url)

        git_args = [
            "push",
            self.config.get("detection.git_remote_name"),
            f"{source}:{target}",
        ]
        selected_flags = {"force": force, "force-with-lease": force_with_lease, "dry-run": dry_run}
        git_args.extend(f"--{flag}" for flag in GIT_PUSH_FLAGS if selected_flags[flag])

        # Tell the remote side not to wait for the build/deploy
        extra_ssh_options = []
        env = {}
        if no_wait:
            no_wait_var = self.config.get("service.push_no_wait_env")
            extra_ssh_options.append(f"SendEnv {no_wait_var}")
            env[no_wait_var] = "1"
        git = self.ensure_git()
        git.set_ssh_command(self.ensure_ssh().get_ssh_command(extra_ssh_options))

        if logger:
            logger.step(f"Pushing {source} to the environment {target}")
        if not git.execute(git_args, quiet=False, env=env):
            if logger:
                logger.log_error("Git push failed")
            return 1
        if dry_run:
            return 0
        if logger:
            logger.success("Push complete")

        self._clear_caches(project)

        if not should_activate:
            return 0
        return self._activate(project, target, parent_id, wait=not no_wait)

    def _resolve_target(self, project_root) -> Optional[str]:
        """Selected environment, else the current Git branch."""
        if self.has_selected_environment():
            return self.get_selected_environment().id
        return self.ensure_git().get_current_branch(cwd=project_root)

    def _clear_caches(self, project: Project) -> None:
        self.ensure_api().clear_environments_cache(project.id)
        if self.has_selected_environment():
            try:
                ssh_url = self.get_selected_environment().get_ssh_url()
            except EnvironmentStateError:
                # Nothing cached for an environment without SSH access
                return
            self.ensure_relationships().clear_cache(ssh_url)

    def _activate(self, project: Project, target: str, parent_id: str, wait: bool) -> int:
        api = self.ensure_api()
        environment: Optional[Environment] = api.get_environment(target, project, refresh=True)
        if environment is None:
            self.print_warning(f"Could not load new environment: {target}")
            return 0
        if environment.is_active:
            return 0

        activities: List[Activity] = []

        # The parent has to be set before activation
        if environment.parent != parent_id:
            if self.logger:
                self.logger.step(f"Setting the parent of environment {environment.id} to {parent_id}")
            activities.extend(api.update_environment(environment, project, {"parent": parent_id}))

        if self.logger:
            self.logger.step(f"Activating environment {environment.id}")
        activities.extend(api.activate_environment(environment, project))

        if wait and not self.ensure_activity_monitor().wait_multiple(activities, project):
            return 1
        return 0


@click.command(name="environment:push")
@click.argument("src", default="HEAD", required=False)
@click.option("--force", is_flag=True, help="Allow non-fast-forward updates")
@click.option(
    "--force-with-lease",
    is_flag=True,
    help="Allow non-fast-forward updates, if the remote-tracking branch is up to date",
)
@click.option("--dry-run", is_flag=True, help="Do everything except actually send the updates")
@click.option("--no-wait", is_flag=True, help="After pushing, do not wait for build or deploy")
@click.option("--activate", is_flag=True, help="Activate the environment after pushing")
@click.option("--parent", help="Set a new environment parent (only used with --activate)")
@project_options
@ssh_options
def environment_push(
    src, force, force_with_lease, dry_run, no_wait, activate, parent,
    project, environment, identity_file, yes, verbose,
):
    """
    Push code to an environment

    \b
    Examples:
      paasctl push                      # Push HEAD to the current branch's environment
      paasctl push feature-x -e staging # Push a branch to another environment
      paasctl push --activate --parent=master
    """
    cmd = EnvironmentPushCommand(
        project_id=project,
        environment_id=environment,
        identity_file=identity_file,
        yes=yes,
        verbose=verbose,
    )
    cmd.run(
        source=src,
        force=force,
        force_with_lease=force_with_lease,
        dry_run=dry_run,
        no_wait=no_wait,
        activate=activate,
        parent=parent,
    )
