"""
HeadlineCheck — Rule-Based Fake Headline Detection

Public API:
  - detect_headline:  Classify one headline (deterministic, no I/O)
  - HeadlineEngine:   The scoring engine behind detect_headline
  - DetectionResult:  Label, confidence, and explanation
  - RuleCategory:     One immutable phrase category of the rule table
  - HeadlineLog:      Append-only CSV log of classifications

Usage:
    from headlinecheck import detect_headline
    result = detect_headline("BREAKING NEWS SHOCKING DISCOVERY!!!")
"""

__version__ = "1.0.0"

from headlinecheck.engine import (
    detect_headline,
    headline_engine,
    HeadlineEngine,
    DetectionResult,
    RuleCategory,
    ScoreState,
    RULE_CATEGORIES,
    ENGINE_VERSION,
)
from headlinecheck.headline_log import HeadlineLog

__all__ = [
    "detect_headline",
    "headline_engine",
    "HeadlineEngine",
    "DetectionResult",
    "RuleCategory",
    "ScoreState",
    "RULE_CATEGORIES",
    "ENGINE_VERSION",
    "HeadlineLog",
]
