"""Engine-facing event feed."""

from .publisher import EngineEventPublisher

__all__ = ["EngineEventPublisher"]
