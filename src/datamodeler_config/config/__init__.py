"""Configuration management for the configuration sync tool."""

from .settings import HostEnvironment, Mode, RunConfig, RunSettings

__all__ = ["HostEnvironment", "Mode", "RunConfig", "RunSettings"]
