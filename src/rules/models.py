from collections import Counter
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class CatalogRules(BaseModel):
    physicians: list[str]
    referring_providers: list[str]
    insurance_companies: list[str]
    us_states: list[str]
    contact_methods: list[str] = ["Email", "Home Number", "Mobile Number"]
    birth_sex_options: list[str] = ["Male", "Female", "Other", "Prefer Not to Say"]

    @field_validator("*")
    @classmethod
    def _non_empty_unique(cls, value: list[str]) -> list[str]:
        cleaned = [v.strip() for v in value]
        if not cleaned:
            raise ValueError("candidate list must not be empty")
        if any(not v for v in cleaned):
            raise ValueError("candidate list must not contain blank entries")
        dupes = sorted(v for v, count in Counter(cleaned).items() if count > 1)
        if dupes:
            raise ValueError(f"duplicate candidates: {', '.join(dupes)}")
        return cleaned

    def as_lists(self) -> dict[str, list[str]]:
        return {name: list(getattr(self, name)) for name in type(self).model_fields}

class FieldRuleSpec(BaseModel):
    label: str
    required: bool = False
    min_length: int | None = Field(default=None, ge=0)
    max_length: int | None = Field(default=None, ge=1)
    kind: Literal["text", "email", "phone", "birth_date", "postal_code"] = "text"
    options: str | None = None  # catalog list name
    message: str | None = None

    @model_validator(mode="after")
    def _bounds_ordered(self) -> "FieldRuleSpec":
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise ValueError("min_length must not exceed max_length")
        return self

class BirthDateRules(BaseModel):
    max_age_years: int = Field(default=150, ge=0)

class IntakeRules(BaseModel):
    project: ProjectRules
    catalog: CatalogRules
    birth_date: BirthDateRules = BirthDateRules()
    # Overrides / additions to the built-in field table, keyed by field id.
    form_fields: dict[str, FieldRuleSpec] = {}

    @model_validator(mode="after")
    def _options_reference_catalog(self) -> "IntakeRules":
        known = set(CatalogRules.model_fields)
        for name, spec in self.form_fields.items():
            if spec.options is not None and spec.options not in known:
                raise ValueError(
                    f"field '{name}' references unknown candidate list '{spec.options}'"
                )
        return self
