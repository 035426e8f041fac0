"""Orchestrator package - runs the publish pipeline."""
from .core import PublishOrchestrator
from .models import PipelineState, PublishResult

__all__ = ["PublishOrchestrator", "PipelineState", "PublishResult"]
