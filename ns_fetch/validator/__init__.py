"""Pre-flight validation of command inputs."""

from .request_validator import RequestValidator

__all__ = ["RequestValidator"]
