"""Changelog generation and release naming for multi-package repositories."""
