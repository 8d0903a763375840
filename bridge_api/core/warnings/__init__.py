"""Warnings layer - Advertencias por umbral."""

from .threshold_rules import ThresholdRule, evaluate_warnings, rules_from_settings

__all__ = ["ThresholdRule", "evaluate_warnings", "rules_from_settings"]
