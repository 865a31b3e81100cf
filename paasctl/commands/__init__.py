"""paasctl CLI commands."""
