"""rirekisho-kit: Japanese job-application document generator."""

__version__ = "0.1.0"
