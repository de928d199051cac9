"""Clone a Jira epic and its child issues into a target project."""

__version__ = "0.1.0"
