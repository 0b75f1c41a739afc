"""screenmatch: screen-element recognition for automation agents.

Register reference images ("templates") and locate them in captured screen
frames with either multi-scale correlation or ORB feature matching.
"""
from .engine import VisionEngine, FeatureEngine, create_matcher
from .core.registry import Template, TemplateRegistry
from .vision.results import MatchResult, FeatureMatch

__version__ = "0.1.0"

__all__ = [
    "VisionEngine",
    "FeatureEngine",
    "create_matcher",
    "Template",
    "TemplateRegistry",
    "MatchResult",
    "FeatureMatch",
    "__version__",
]
