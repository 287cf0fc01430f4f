"""Runtime services: configuration and telemetry."""

from .settings import EngineSettings

__all__ = ["EngineSettings"]
