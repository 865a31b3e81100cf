"""
paasctl CLI - UI Components
Standardized headers and UI elements
"""

from typing import Optional

from rich.console import Console

LOGO = "paasctl"

BRAND_COLOR = "cyan"


def show_header(
    title: str,
    subtitle: Optional[str] = None,
    project: Optional[str] = None,
    environment: Optional[str] = None,
    details: Optional[dict] = None,
    console: Optional[Console] = None,
):
    """
    Display a standardized paasctl command header.

    Args:
        title: Main title (e.g., "Push code")
        subtitle: Optional subtitle line
        project: Project ID (if applicable)
        environment: Environment ID (if applicable)
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Push code",
            project="abcdefg123456",
            details={"Source": "HEAD"}
        )
    """
    if console is None:
        console = Console(stderr=True)

    prefix = f" [bold color(214)]{LOGO}[/bold color(214)] [dim]›[/dim]"
    console.print(f"{prefix} [bold white]{title}[/bold white]", highlight=False)

    if subtitle:
        console.print(f"{prefix} [dim]{subtitle}[/dim]", highlight=False)
    if project:
        console.print(f"{prefix} Project: [{BRAND_COLOR}]{project}[/{BRAND_COLOR}]", highlight=False)
    if environment:
        console.print(
            f"{prefix} Environment: [{BRAND_COLOR}]{environment}[/{BRAND_COLOR}]", highlight=False
        )
    if details:
        for key, value in details.items():
            console.print(f"{prefix} {key}: [{BRAND_COLOR}]{value}[/{BRAND_COLOR}]", highlight=False)

    console.print()
