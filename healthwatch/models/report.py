# report models: check-in creation, stored record and response schemas
# field aliases mirror the dashboard frontend (ageGroup, createdAt, ...)

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from healthwatch.config import settings


AGE_GROUPS = [
    "18-24",
    "25-34",
    "35-44",
    "45-54",
    "55-64",
    "65+",
]

SYMPTOM_CATEGORIES = [
    "Respiratory (cough, shortness of breath)",
    "Fever / flu-like symptoms",
    "Headache / fatigue",
    "Digestive issues",
    "Other",
]

ENVIRONMENT_ISSUES = [
    "Heat / humidity",
    "Air quality / smoke",
    "Water taste / smell",
    "Noise / pollution",
    "Other",
]

REQUIRED_FIELDS_MESSAGE = (
    "Please complete all required fields (region, age group, symptom, environment)."
)


def _check_choice(value: Optional[str], choices: list[str], kind: str) -> Optional[str]:
    # blank values are reported as missing by the router, not here
    if value and value not in choices:
        raise ValueError(f"unknown {kind}: {value!r}")
    return value


class ReportCreate(BaseModel):
    """payload for an anonymous check-in submission"""
    region: Optional[str] = Field(None, description="region, postal code or neighbourhood")
    age_group: Optional[str] = Field(None, alias="ageGroup")
    symptom_category: Optional[str] = Field(None, alias="symptomCategory")
    environment_issue: Optional[str] = Field(None, alias="environmentIssue")
    mental_health_flag: bool = Field(False, alias="mentalHealthFlag")
    notes: str = Field("", max_length=settings.NOTES_MAX_LENGTH)

    model_config = {"populate_by_name": True, "str_strip_whitespace": True}

    @field_validator("age_group")
    @classmethod
    def _known_age_group(cls, value):
        return _check_choice(value, AGE_GROUPS, "age group")

    @field_validator("symptom_category")
    @classmethod
    def _known_symptom(cls, value):
        return _check_choice(value, SYMPTOM_CATEGORIES, "symptom category")

    @field_validator("environment_issue")
    @classmethod
    def _known_environment(cls, value):
        return _check_choice(value, ENVIRONMENT_ISSUES, "environment issue")

    def missing_fields(self) -> list[str]:
        """names of required fields that are absent or blank"""
        required = {
            "region": self.region,
            "ageGroup": self.age_group,
            "symptomCategory": self.symptom_category,
            "environmentIssue": self.environment_issue,
        }
        return [name for name, value in required.items() if not value]


class Report(BaseModel):
    """a stored check-in, immutable once created"""
    id: str
    region: str
    age_group: str = Field(..., alias="ageGroup")
    symptom_category: str = Field(..., alias="symptomCategory")
    environment_issue: str = Field(..., alias="environmentIssue")
    mental_health_flag: bool = Field(False, alias="mentalHealthFlag")
    notes: str = ""
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True, "frozen": True}


class ReportResponse(Report):
    """a check-in as shown in the recent table, with a relative time label"""
    when: str = ""


class ReportSubmitResponse(BaseModel):
    """response after a check-in has been recorded"""
    report: ReportResponse
    message: str = "Thank you - your anonymous check-in has been recorded."


class ReportOptions(BaseModel):
    """choices for the check-in form selects"""
    age_groups: list[str] = Field(default_factory=lambda: list(AGE_GROUPS), alias="ageGroups")
    symptom_categories: list[str] = Field(
        default_factory=lambda: list(SYMPTOM_CATEGORIES), alias="symptomCategories"
    )
    environment_issues: list[str] = Field(
        default_factory=lambda: list(ENVIRONMENT_ISSUES), alias="environmentIssues"
    )

    model_config = {"populate_by_name": True}
