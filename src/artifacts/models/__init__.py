"""Model namespace for ggtag artifact schemas."""

from artifacts.models.artifacts.callsites import CallShape, CallSiteRecord

__all__ = ["CallShape", "CallSiteRecord"]
