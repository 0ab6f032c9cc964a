"""Exceptions raised by the preview lifecycle."""

from __future__ import annotations


class ConfigurationError(Exception):
    """A required input is missing or the run context is unsuitable.

    Fatal and never retried: the message names the missing input and how to
    supply it, and the CLI surfaces it verbatim with a non-zero exit.
    """
