# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: PortfolioContent
# -----------------------------------------------------------------------------
from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Dict, List, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StringConstraints

# required text fields must carry something besides whitespace
RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ContentModel(BaseModel):
    # content files use camelCase keys; snake_case field names are accepted too
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Contact(ContentModel):
    email: RequiredStr
    github: str = ""
    linkedin: str = ""
    phone: Optional[str] = None


class About(ContentModel):
    name: RequiredStr
    headline: str = ""
    bio: RequiredStr
    contact: Contact
    skills: Dict[str, Tuple[str, ...]] = Field(default_factory=dict)


class Project(ContentModel):
    id: RequiredStr
    title: RequiredStr
    short_description: str = Field("", alias="shortDescription")
    tech: Tuple[str, ...] = ()
    role: str = ""
    date_range: str = Field("", alias="dateRange")
    problem: Optional[str] = None
    solution: Optional[str] = None
    my_contribution: Optional[str] = Field(None, alias="myContribution")
    features: Tuple[str, ...] = ()
    learned: Tuple[str, ...] = ()


class Experience(ContentModel):
    id: RequiredStr
    company: RequiredStr
    role: RequiredStr
    period: str = ""
    tags: Tuple[str, ...] = ()
    responsibilities: Tuple[str, ...] = ()
    stack: Tuple[str, ...] = ()
    impact: Dict[str, Union[int, float]] = Field(default_factory=dict)


class Education(ContentModel):
    id: RequiredStr
    institution: RequiredStr
    program: RequiredStr
    degree_level: str = Field("", alias="degreeLevel")
    period: str = ""
    courses: Tuple[str, ...] = ()
    projects: Tuple[str, ...] = ()


class StructuredContent(ContentModel):
    """
    The subject's curated facts. Read-only at query time.
    Record shapes are closed: About, Project, Experience, Education.
    """

    about: About
    projects: Tuple[Project, ...] = Field((), validation_alias=AliasChoices("apps", "projects"))
    experience: Tuple[Experience, ...] = ()
    education: Tuple[Education, ...] = ()

    @classmethod
    def from_json_file(cls, path: str | Path) -> "StructuredContent":
        with open(path, "r", encoding="utf-8") as fh:
            return cls.model_validate(json.load(fh))

    @property
    def contact_email(self) -> str:
        return self.about.contact.email

    def company_names(self) -> List[str]:
        return [e.company for e in self.experience]
