"""repo-inspector: lint, security and type-error scanning of GitHub repositories."""

__version__ = "0.1.0"
