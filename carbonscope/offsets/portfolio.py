# -*- coding: utf-8 -*-
"""
Offset Portfolio Pricing

Prices an offset plan: a share of an emissions total is split equally across
the selected projects and each allocation is priced at the project's price
per tonne.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from carbonscope.calculation.metrics import offset_cost
from carbonscope.exceptions import ValidationError
from carbonscope.offsets.catalog import OffsetProject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OffsetAllocation:
    project: OffsetProject
    tonnes: float
    cost: float


@dataclass(frozen=True)
class OffsetPlan:
    """
    Priced offset plan.

    Attributes:
        emissions: Emissions total the plan is based on (tCO2e)
        offset_percentage: Share of ``emissions`` to offset (0-100)
        emissions_to_offset: emissions * offset_percentage / 100
        allocations: One entry per selected project, in selection order
        total_cost: Sum of allocation costs
        average_price_per_tonne: Unweighted mean of selected project prices
    """
    emissions: float
    offset_percentage: float
    emissions_to_offset: float
    allocations: List[OffsetAllocation] = field(default_factory=list)
    total_cost: float = 0.0
    average_price_per_tonne: float = 0.0

    @property
    def per_project_tonnes(self) -> float:
        return self.allocations[0].tonnes if self.allocations else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "emissions": self.emissions,
            "offset_percentage": self.offset_percentage,
            "emissions_to_offset": self.emissions_to_offset,
            "per_project_tonnes": self.per_project_tonnes,
            "allocations": [
                {
                    "project": a.project.name,
                    "price_per_tonne": a.project.price_per_tonne,
                    "tonnes": a.tonnes,
                    "cost": a.cost,
                }
                for a in self.allocations
            ],
            "total_cost": self.total_cost,
            "average_price_per_tonne": self.average_price_per_tonne,
        }


def plan_offsets(
    emissions: float,
    projects: Iterable[OffsetProject],
    offset_percentage: float = 100.0,
) -> OffsetPlan:
    """
    Split and price an offset purchase across projects.

    Args:
        emissions: Emissions total in tCO2e
        projects: Selected projects (equal split, repeats ignored)
        offset_percentage: Share of emissions to offset, 0-100

    Returns:
        OffsetPlan; with no projects selected, costs and prices are 0

    Raises:
        ValidationError: If offset_percentage is outside [0, 100]

    Example:
        >>> plan = plan_offsets(100, DEFAULT_OFFSET_PROJECTS[:2], offset_percentage=50)
        >>> plan.total_cost  # 25 t at 15 + 25 t at 8
        575.0
    """
    if not 0 <= offset_percentage <= 100:
        raise ValidationError(
            message=f"Offset percentage must be between 0 and 100, got {offset_percentage}",
            invalid_fields={"offset_percentage": "must be within [0, 100]"},
        )

    # A project counts once however often it is selected
    selected: List[OffsetProject] = []
    seen = set()
    for project in projects:
        if project.name not in seen:
            seen.add(project.name)
            selected.append(project)
    emissions_to_offset = emissions * (offset_percentage / 100)

    if not selected:
        return OffsetPlan(
            emissions=emissions,
            offset_percentage=offset_percentage,
            emissions_to_offset=emissions_to_offset,
        )

    per_project = emissions_to_offset / len(selected)
    allocations = [
        OffsetAllocation(
            project=project,
            tonnes=per_project,
            cost=offset_cost(per_project, project.price_per_tonne),
        )
        for project in selected
    ]

    total_cost = 0.0
    for allocation in allocations:
        total_cost += allocation.cost
    average_price = sum(p.price_per_tonne for p in selected) / len(selected)

    logger.debug(
        "Offset plan: %.3f t across %d project(s), total cost %.2f",
        emissions_to_offset, len(selected), total_cost,
    )

    return OffsetPlan(
        emissions=emissions,
        offset_percentage=offset_percentage,
        emissions_to_offset=emissions_to_offset,
        allocations=allocations,
        total_cost=total_cost,
        average_price_per_tonne=average_price,
    )
