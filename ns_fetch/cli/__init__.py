"""Command implementations and interactive setup."""

from .runner import CommandRunner
from .interactive import run_init, prompt_credentials

__all__ = ["CommandRunner", "run_init", "prompt_credentials"]
