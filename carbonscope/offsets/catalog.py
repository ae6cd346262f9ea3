# -*- coding: utf-8 -*-
"""
Offset Project Catalogue

Static reference list of carbon offset projects with their price per tonne
CO2e, location and certification standard.
"""

import logging
from typing import Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from carbonscope.exceptions import MissingData

logger = logging.getLogger(__name__)


class OffsetProject(BaseModel):
    """One purchasable offset project"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    project_type: str = Field(..., alias="type")
    price_per_tonne: float = Field(..., ge=0, alias="pricePerTonne")
    location: str
    certification: str


DEFAULT_OFFSET_PROJECTS: Tuple[OffsetProject, ...] = (
    OffsetProject(
        name="Reforestation - Amazon",
        project_type="Nature-based",
        price_per_tonne=15,
        location="Brazil",
        certification="VCS",
    ),
    OffsetProject(
        name="Wind Power - India",
        project_type="Renewable Energy",
        price_per_tonne=8,
        location="India",
        certification="Gold Standard",
    ),
    OffsetProject(
        name="Solar Farm - Kenya",
        project_type="Renewable Energy",
        price_per_tonne=12,
        location="Kenya",
        certification="Gold Standard",
    ),
    OffsetProject(
        name="Cookstoves - Uganda",
        project_type="Energy Efficiency",
        price_per_tonne=10,
        location="Uganda",
        certification="VCS + CCB",
    ),
    OffsetProject(
        name="Blue Carbon - Indonesia",
        project_type="Nature-based",
        price_per_tonne=25,
        location="Indonesia",
        certification="VCS + CCB",
    ),
    OffsetProject(
        name="Direct Air Capture",
        project_type="Technology",
        price_per_tonne=600,
        location="Iceland",
        certification="CDR.fyi",
    ),
    OffsetProject(
        name="Biochar - USA",
        project_type="Technology",
        price_per_tonne=150,
        location="United States",
        certification="Puro.earth",
    ),
    OffsetProject(
        name="Ocean Alkalinity",
        project_type="Technology",
        price_per_tonne=200,
        location="Norway",
        certification="CDR.fyi",
    ),
)


def get_project(
    name: str,
    catalog: Optional[Iterable[OffsetProject]] = None,
) -> OffsetProject:
    """
    Find a project by name (case-insensitive).

    Raises:
        MissingData: If no project has that name
    """
    projects = tuple(catalog) if catalog is not None else DEFAULT_OFFSET_PROJECTS
    wanted = name.strip().lower()
    for project in projects:
        if project.name.lower() == wanted:
            return project

    logger.error("Offset project not found: %s", name)
    raise MissingData(
        message=f"Offset project not found: {name}",
        data_type="offset_project",
        missing_fields=[name],
        context={"available_projects": [p.name for p in projects]},
    )


def projects_by_type(
    project_type: str,
    catalog: Optional[Iterable[OffsetProject]] = None,
) -> Tuple[OffsetProject, ...]:
    projects = tuple(catalog) if catalog is not None else DEFAULT_OFFSET_PROJECTS
    return tuple(p for p in projects if p.project_type.lower() == project_type.lower())
