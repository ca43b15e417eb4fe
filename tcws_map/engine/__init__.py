"""Signal map formatting engine."""

from tcws_map.engine.registry import stage, Phase, get_registry
from tcws_map.engine.context import FormatContext
from tcws_map.engine.config import FormatterConfig, Padding
from tcws_map.engine.pipeline import Pipeline, create_pipeline

__all__ = [
    "stage",
    "Phase",
    "get_registry",
    "FormatContext",
    "FormatterConfig",
    "Padding",
    "Pipeline",
    "create_pipeline",
]
