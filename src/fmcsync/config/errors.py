"""Errors raised while reading fmcsync settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A setting is present but unusable, e.g. an unknown not-found policy."""


class MissingConfigurationError(ConfigurationError):
    """One or more required settings (FMC host, domain, token) are unset or blank."""
