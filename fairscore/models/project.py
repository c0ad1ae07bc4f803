from typing import Optional

from pydantic import Field, field_validator

from fairscore.models.base import CamelModel


class ProjectBase(CamelModel):
    """
    Base Pydantic model for Project.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Project title"
    )

    category: str = Field(default="", max_length=255, description="e.g. IoT, AI/ML, Environment")
    team: str = Field(default="", max_length=255, description="Team name")
    school: str = Field(default="", max_length=255)
    contact: str = Field(default="", max_length=255, description="Email or phone")

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("category", "team", "school", "contact", mode="before")
    @classmethod
    def blank_optional(cls, value):
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else str(value)


class ProjectCreate(ProjectBase):
    """
    Model for creating a new project.
    """
    pass


class ProjectUpdate(CamelModel):
    """
    Partial update; omitted fields keep their value.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = None
    team: Optional[str] = None
    school: Optional[str] = None
    contact: Optional[str] = None

    @field_validator("title", "category", "team", "school", "contact", mode="before")
    @classmethod
    def strip_values(cls, value):
        return value.strip() if isinstance(value, str) else value


class Project(ProjectBase):
    """
    Stored project. Title is not enforced here so records loaded from the
    remote store are accepted as they are.
    """

    id: str
    title: str = ""
