"""
Project Command Base Class

Base class for commands that act on a platform project.
Provides project/environment selection and lazy service initialization.
"""

from pathlib import Path
from typing import Optional

from paasctl.base.base_command import BaseCommand
from paasctl.config import Config
from paasctl.exceptions import ConfigurationError, RootNotFoundError
from paasctl.models.platform import Environment, Project
from paasctl.models.ssh import SSHConfig
from paasctl.services import (
    ActivityMonitor,
    ApiService,
    CacheService,
    GitService,
    LocalProject,
    RelationshipsService,
    ShellService,
    SSHService,
)


class ProjectCommand(BaseCommand):
    """
    Base class for project-specific commands.

    Provides:
    - Project selection (--project, or the local project config)
    - Environment selection (--environment, or the current Git branch)
    - Lazily created services sharing one config, logger and cache
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        environment_id: Optional[str] = None,
        identity_file: Optional[str] = None,
        cwd: Optional[Path] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.project_id = project_id
        self.environment_id = environment_id
        self.identity_file = identity_file
        self.cwd = cwd

        self.shell: Optional[ShellService] = None
        self.git: Optional[GitService] = None
        self.local_project: Optional[LocalProject] = None
        self.cache: Optional[CacheService] = None
        self.api: Optional[ApiService] = None
        self.ssh: Optional[SSHService] = None
        self.relationships: Optional[RelationshipsService] = None
        self.activity_monitor: Optional[ActivityMonitor] = None

        self._project: Optional[Project] = None
        self._environment: Optional[Environment] = None

    @property
    def config(self) -> Config:
        if self._config is None:
            # The project .env can only be read once the project root is known
            self._config = Config()
            project_root = self.ensure_local_project().get_project_root()
            if project_root is not None:
                self._config = Config(project_root=project_root)
                self.ensure_local_project().config = self._config
        return self._config

    def init_logger(self, project_name: str, command_name: str):
        logger = super().init_logger(project_name, command_name)
        # Services created before the logger log through it from now on
        if self.shell is not None:
            self.shell.logger = logger
        if self.activity_monitor is not None:
            self.activity_monitor.logger = logger
        return logger

    # Services

    def ensure_shell(self) -> ShellService:
        if self.shell is None:
            self.shell = ShellService(logger=self.logger, verbose=self.verbose)
        return self.shell

    def ensure_git(self) -> GitService:
        if self.git is None:
            self.git = GitService(self.ensure_shell())
        return self.git

    def ensure_local_project(self) -> LocalProject:
        if self.local_project is None:
            config = self._config if self._config is not None else Config()
            self.local_project = LocalProject(config, self.ensure_git(), cwd=self.cwd)
        return self.local_project

    def ensure_cache(self) -> CacheService:
        if self.cache is None:
            self.cache = CacheService(self.config.user_config_dir() / "cache")
        return self.cache

    def ensure_api(self) -> ApiService:
        if self.api is None:
            self.api = ApiService(self.config, self.ensure_cache())
        return self.api

    def ensure_ssh(self) -> SSHService:
        if self.ssh is None:
            ssh_config = SSHConfig(
                identity_file=self.identity_file or self.config.get("ssh.identity_file"),
                options=list(self.config.get("ssh.options", [])),
                verbose=self.verbose,
            )
            self.ssh = SSHService(ssh_config, self.ensure_shell())
        return self.ssh

    def ensure_relationships(self) -> RelationshipsService:
        if self.relationships is None:
            self.relationships = RelationshipsService(
                self.ensure_ssh(),
                self.ensure_cache(),
                ttl=self.config.get("api.relationships_ttl", 3600),
            )
        return self.relationships

    def ensure_activity_monitor(self) -> ActivityMonitor:
        if self.activity_monitor is None:
            self.activity_monitor = ActivityMonitor(
                self.ensure_api(),
                self.console,
                poll_interval=self.config.get("api.activity_poll_interval", 3),
                logger=self.logger,
            )
        return self.activity_monitor

    # Project / environment selection

    def get_project_root(self) -> Optional[Path]:
        return self.ensure_local_project().get_project_root()

    def require_project_root(self) -> Path:
        project_root = self.get_project_root()
        if project_root is None:
            raise RootNotFoundError(str(self.cwd or Path.cwd()))
        return project_root

    def get_selected_project(self) -> Project:
        """
        Resolve the project from --project or the local project config.

        Raises:
            ConfigurationError: If no project can be determined or found
        """
        if self._project is None:
            project_id = self.project_id
            if not project_id:
                project_id = self.ensure_local_project().get_project_config().get("id")
            if not project_id:
                raise ConfigurationError(
                    "Could not determine the project",
                    context="Use --project, or run this inside a project directory",
                )
            project = self.ensure_api().get_project(project_id)
            if project is None:
                raise ConfigurationError(f"Project not found: {project_id}")
            self._project = project
        return self._project

    def select_environment(self, detect_from_branch: bool = True) -> Optional[Environment]:
        """
        Resolve the environment from --environment, or else from the
        current Git branch when an environment of that name exists.

        Raises:
            ConfigurationError: If --environment names an unknown environment
        """
        project = self.get_selected_project()
        api = self.ensure_api()

        if self.environment_id:
            environment = api.get_environment(self.environment_id, project)
            if environment is None:
                raise ConfigurationError(f"Specified environment not found: {self.environment_id}")
            self._environment = environment
        elif detect_from_branch:
            project_root = self.get_project_root()
            if project_root is not None:
                branch = self.ensure_git().get_current_branch(cwd=project_root)
                if branch:
                    self._environment = api.get_environment(branch, project)
        return self._environment

    def has_selected_environment(self) -> bool:
        return self._environment is not None

    def get_selected_environment(self) -> Environment:
        if self._environment is None:
            raise ConfigurationError("No environment selected", context="Use --environment")
        return self._environment
