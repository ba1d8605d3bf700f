"""Operator command-line utilities."""
