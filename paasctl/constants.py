"""
paasctl CLI Constants

Centralized constants for magic values and defaults.
"""

# Environment statuses that count as "active"
ACTIVE_ENVIRONMENT_STATUSES = ("active", "dirty")

# Activity states
ACTIVITY_STATE_PENDING = "pending"
ACTIVITY_STATE_COMPLETE = "complete"
ACTIVITY_STATE_CANCELLED = "cancelled"
ACTIVITY_RESULT_SUCCESS = "success"

# Git push pass-through flags (option name -> git flag)
GIT_PUSH_FLAGS = ("force", "force-with-lease", "dry-run")

# Drush
DRUSH_COMMAND = "drush"
DRUSH_VERSION_PATTERN = r"[:\s]\s*([0-9]+\.[a-z0-9\-\.]+)\s*$"
DRUSH_YAML_ALIASES_MIN_VERSION = "9.0.0-alpha1"
DRUSH_PHP_ALIASES_MAX_VERSION = "9.0.0"
DRUSH_MAKE_LOCK_MIN_VERSION = "7.0.0-rc1"
DRUSH_LOCAL_ALIAS = "_local"
DRUSH_REMOTE_ROOT = "/app/public"

# Cache keys
ENVIRONMENTS_CACHE_PREFIX = "environments"
RELATIONSHIPS_CACHE_PREFIX = "relationships"

# Log Configuration
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"
