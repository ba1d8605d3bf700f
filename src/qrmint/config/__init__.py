"""Application configuration."""

from qrmint.config.settings import AppConfig, Environment

__all__ = ["AppConfig", "Environment"]
