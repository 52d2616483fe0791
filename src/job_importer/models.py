from typing import Annotated, Literal

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    StringConstraints,
    TypeAdapter,
    field_validator,
)
from pydantic.alias_generators import to_camel

MAX_JOB_TEXT_LENGTH = 12000
MAX_SKILLS = 12

EmploymentType = Literal["FULL_TIME", "PART_TIME", "CONTRACT", "INTERNSHIP", "OTHER"]
Seniority = Literal["INTERN", "JUNIOR", "MID", "SENIOR", "LEAD", "UNKNOWN"]
RemoteType = Literal["REMOTE", "HYBRID", "ONSITE", "UNKNOWN"]
EnrichmentSource = Literal["ai", "heuristic"]


class _Record(BaseModel):
    """
    Base for every value this package hands back to callers.
    Immutable, snake_case in Python, camelCase when serialized.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class PartialFields(_Record):
    """Company/role/location/URL candidates produced by a single parser."""

    company: str | None = None
    role: str | None = None
    location: str | None = None
    job_url: str | None = None


class ExtractedFields(PartialFields):
    """
    Merged import result. Unresolved fields stay None and are explained
    in `warnings` instead of failing the extraction.
    """

    warnings: list[str] = Field(default_factory=list)

    @property
    def is_usable(self) -> bool:
        """True when at least one of company or role was detected."""
        return bool(self.company or self.role)


class TopCard(_Record):
    """Fields read from the rendered LinkedIn job top card."""

    role: str | None = None
    company: str | None = None
    location: str | None = None
    description: str | None = None


class EnrichmentFields(_Record):
    """
    Full enrichment record. Every key is always present; "no signal" is
    None, UNKNOWN or OTHER depending on the field.
    """

    company: str | None = None
    role: str | None = None
    location: str | None = None
    employment_type: EmploymentType = "OTHER"
    seniority: Seniority = "UNKNOWN"
    remote_type: RemoteType = "UNKNOWN"
    salary_min: PositiveInt | None = None
    salary_max: PositiveInt | None = None
    currency: str | None = None
    skills: list[str] = Field(default_factory=list, max_length=MAX_SKILLS)


ShortText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
SkillName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=40)]
CurrencyCode = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^[A-Z]{3}$")]


class AIEnrichment(_Record):
    """
    Schema the external model's JSON output must satisfy.
    Enum fields are nullable here: a null means "model had no opinion"
    and the heuristic value is kept.
    """

    company: ShortText | None
    role: ShortText | None
    location: ShortText | None
    employment_type: EmploymentType | None
    seniority: Seniority | None
    remote_type: RemoteType | None
    salary_min: PositiveInt | None
    salary_max: PositiveInt | None
    currency: CurrencyCode | None
    skills: list[SkillName] = Field(max_length=MAX_SKILLS)


class EnrichmentResult(_Record):
    fields: EnrichmentFields
    source: EnrichmentSource
    warnings: list[str] = Field(default_factory=list)


_HTTP_URL = TypeAdapter(AnyHttpUrl)


def _check_http_url(value: str) -> str:
    # Validate as an http(s) URL but keep the caller's exact string.
    _HTTP_URL.validate_python(value)
    return value


class ImportRequest(_Record):
    """Input of the import command: a job page URL plus optional pasted text."""

    linkedin_url: str
    job_text: str | None = Field(default=None, max_length=MAX_JOB_TEXT_LENGTH)

    @field_validator("linkedin_url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        return _check_http_url(value.strip())


class EnrichRequest(_Record):
    """Input of the enrich command: required job text plus optional URL."""

    job_text: str = Field(min_length=1, max_length=MAX_JOB_TEXT_LENGTH)
    linkedin_url: str | None = None

    @field_validator("job_text")
    @classmethod
    def _validate_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Job text is required.")
        return value

    @field_validator("linkedin_url")
    @classmethod
    def _validate_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _check_http_url(value.strip())
