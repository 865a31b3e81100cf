"""paasctl - Command-line client for the platform-as-a-service API"""

__version__ = "1.0.0"
