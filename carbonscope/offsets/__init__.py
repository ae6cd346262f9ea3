"""
CarbonScope Offsets

Offset project catalogue and offset plan pricing.
"""

from carbonscope.offsets.catalog import (
    DEFAULT_OFFSET_PROJECTS,
    OffsetProject,
    get_project,
    projects_by_type,
)
from carbonscope.offsets.portfolio import OffsetAllocation, OffsetPlan, plan_offsets

__all__ = [
    "DEFAULT_OFFSET_PROJECTS",
    "OffsetProject",
    "get_project",
    "projects_by_type",
    "OffsetAllocation",
    "OffsetPlan",
    "plan_offsets",
]
