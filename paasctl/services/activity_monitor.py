"""Activity monitor: waits for asynchronous platform operations to finish."""

import time
from typing import Callable, List, Optional

from rich.console import Console

from paasctl.exceptions import ActivityError, ApiError
from paasctl.logger import CommandLogger
from paasctl.models.platform import Activity, Project
from paasctl.services.api_service import ApiService


class ActivityMonitor:
    """Polls activities until each one completes."""

    def __init__(
        self,
        api: ApiService,
        console: Console,
        poll_interval: float = 3,
        logger: Optional[CommandLogger] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.api = api
        self.console = console
        self.poll_interval = poll_interval
        self.logger = logger
        self._sleep = sleep

    def wait(self, activity: Activity, project: Project) -> Activity:
        """
        Block until an activity completes.

        Returns:
            The completed Activity

        Raises:
            ActivityError: If the activity can no longer be loaded
        """
        label = activity.description or activity.type
        with self.console.status(f"[cyan]{label}[/cyan]") as status:
            while not activity.is_complete:
                self._sleep(self.poll_interval)
                try:
                    activity = self.api.get_activity(project, activity.id)
                except ApiError as e:
                    raise ActivityError(
                        f"Failed to load activity {activity.id}", context=e.message
                    )
                status.update(
                    f"[cyan]{label}[/cyan] [dim]({activity.completion_percent}%)[/dim]"
                )
        return activity

    def wait_multiple(self, activities: List[Activity], project: Project) -> bool:
        """
        Wait for several activities, in the order they were started.

        Returns:
            True if every activity succeeded
        """
        success = True
        for activity in activities:
            if self.logger:
                self.logger.log(f"Waiting for activity {activity.id} ({activity.type})")
            finished = self.wait(activity, project)
            label = finished.description or finished.type
            if finished.is_success:
                self.console.print(f"  [green]✓[/green] {label}", highlight=False)
                if self.logger:
                    self.logger.log(f"Activity {finished.id} succeeded")
            else:
                success = False
                self.console.print(
                    f"  [red]✗[/red] {label} [dim]({finished.state}, {finished.result or 'no result'})[/dim]",
                    highlight=False,
                )
                if self.logger:
                    self.logger.log(
                        f"Activity {finished.id} failed: state={finished.state} result={finished.result}",
                        "ERROR",
                    )
        return success
