"""
Business Impact Analysis (BIA) analytics engine.

Turns process, resource and dependency records supplied by the BIA
registry into criticality scores, dependency-network signals and a
BCDR (business continuity / disaster recovery) readiness report.
"""

__version__ = "1.0.0"
