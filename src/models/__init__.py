"""
Models package for wikimark

Contains data structures and type definitions for the rendering pipeline.
"""

from .state import ProgramState, pipeline
from .segment import RenderMode, Segment
from .rules import Rule, RuleSet, rule_make, ruleset_apply

__all__ = [
    "ProgramState",
    "pipeline",
    "RenderMode",
    "Segment",
    "Rule",
    "RuleSet",
    "rule_make",
    "ruleset_apply",
]
