"""
BIA analytics engine.

Subpackages:
    impact: Temporal impact scoring and recovery objective derivation
    network: Dependency map normalization, graph building and analysis
    bcdr: BCDR gap analysis, resilience insights and text reports

The BIAAnalysisEngine runs them all over one snapshot.
"""

from .pipeline import BIAAnalysisEngine

__all__ = ["BIAAnalysisEngine"]
