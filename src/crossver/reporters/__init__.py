"""Output of generated matrices."""

from .base import Reporter
from .console import ConsoleReporter
from .github import GitHubActionsReporter

__all__ = ["ConsoleReporter", "GitHubActionsReporter", "Reporter"]
