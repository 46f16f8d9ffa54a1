"""Application configuration: environment settings, release configuration models and the CLI."""
