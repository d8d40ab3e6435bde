"""Lexical cursor context: completion trigger rules and hover tokens."""
from restxls.context.hover_token import (
    HoverTokenExtractor,
    build_hover,
    extract_token,
)
from restxls.context.trigger_context import (
    TRIGGER_RULES,
    TriggerContextClassifier,
    TriggerRule,
    classify,
    line_prefix,
)

__all__ = [
    "HoverTokenExtractor",
    "TRIGGER_RULES",
    "TriggerContextClassifier",
    "TriggerRule",
    "build_hover",
    "classify",
    "extract_token",
    "line_prefix",
]
