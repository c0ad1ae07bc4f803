from typing import Annotated, Optional

from pydantic import BeforeValidator, Field, field_validator

from fairscore.models.base import CamelModel


def _coerce_code(value):
    # Codes arrive as numbers from the remote sheet and as strings from forms
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("Access code must be numeric")
    if isinstance(value, (int, float)):
        return str(int(value))
    return str(value).strip()


CodeInput = Annotated[Optional[str], BeforeValidator(_coerce_code)]
StoredCode = Annotated[str, BeforeValidator(lambda v: _coerce_code(v) or "")]


class EvaluatorBase(CamelModel):
    """
    Base Pydantic model for Evaluator.
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=320, description="Login key")
    expertise: str = Field(default="", max_length=255, description="e.g. Robotics, AI")
    notes: str = Field(default="", max_length=2000)

    @field_validator("name", "email", mode="before")
    @classmethod
    def strip_required(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if "@" not in value:
            raise ValueError("Email must contain '@'")
        return value

    @field_validator("expertise", "notes", mode="before")
    @classmethod
    def blank_optional(cls, value):
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else str(value)


class EvaluatorCreate(EvaluatorBase):
    """
    Model for creating an evaluator. A code is generated when omitted.
    """

    code: CodeInput = Field(default=None, pattern=r"^\d{4,10}$")


class EvaluatorUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, min_length=3, max_length=320)
    expertise: Optional[str] = None
    notes: Optional[str] = None
    code: CodeInput = Field(default=None, pattern=r"^\d{4,10}$")

    @field_validator("name", "email", "expertise", "notes", mode="before")
    @classmethod
    def strip_values(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def check_email(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and "@" not in value:
            raise ValueError("Email must contain '@'")
        return value


class EvaluatorProfileUpdate(CamelModel):
    """Fields an evaluator may change about themselves."""

    name: str = Field(..., min_length=1, max_length=255)
    expertise: str = ""
    notes: str = ""

    @field_validator("name", "expertise", "notes", mode="before")
    @classmethod
    def strip_values(cls, value):
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value


class Evaluator(CamelModel):
    """
    Stored evaluator. Lenient so remote and bulk-imported rows load as-is.
    """

    id: str
    name: str = ""
    email: str = ""
    expertise: str = ""
    notes: str = ""
    code: StoredCode = ""

    @field_validator("name", "email", "expertise", "notes", mode="before")
    @classmethod
    def none_to_blank(cls, value):
        return "" if value is None else value

    @property
    def display_name(self) -> str:
        return self.name or self.email


class EvaluatorState(CamelModel):
    finalized_all: bool = False
