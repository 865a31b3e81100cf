"""
Drush site alias writers.

One writer per alias file format; the Drush service picks which ones to run
from the installed Drush version.
"""

from .common import AliasWriter
from .drush_php import DrushPhpWriter
from .drush_yaml import DrushYamlWriter

__all__ = [
    "AliasWriter",
    "DrushPhpWriter",
    "DrushYamlWriter",
]
