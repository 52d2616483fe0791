import pytest
from pydantic import ValidationError

from job_importer.models import (
    AIEnrichment,
    EnrichmentFields,
    EnrichmentResult,
    EnrichRequest,
    ExtractedFields,
    ImportRequest,
)


def test_extracted_fields_defaults():
    fields = ExtractedFields()
    assert fields.company is None
    assert fields.role is None
    assert fields.location is None
    assert fields.job_url is None
    assert fields.warnings == []


def test_records_are_immutable():
    """Test that returned records cannot be modified."""
    fields = ExtractedFields(role="Engineer")
    with pytest.raises(ValidationError):
        fields.role = "Other"


def test_records_accept_camel_case_aliases():
    fields = EnrichmentFields.model_validate({"employmentType": "CONTRACT", "salaryMin": 10})
    assert fields.employment_type == "CONTRACT"
    assert fields.salary_min == 10


def test_enrichment_fields_reject_unknown_enum():
    with pytest.raises(ValidationError):
        EnrichmentFields(seniority="PRINCIPAL")


def test_enrichment_result_serialization():
    result = EnrichmentResult(fields=EnrichmentFields(), source="heuristic", warnings=["w"])
    data = result.model_dump(mode="json", by_alias=True)

    assert data["source"] == "heuristic"
    assert data["fields"]["remoteType"] == "UNKNOWN"
    assert data["fields"]["employmentType"] == "OTHER"
    assert data["fields"]["skills"] == []


def test_ai_enrichment_requires_every_key():
    """Test that the AI schema rejects output missing a key, even a nullable one."""
    with pytest.raises(ValidationError):
        AIEnrichment.model_validate({"company": "Acme", "skills": []})


def test_ai_enrichment_trims_strings():
    ai = AIEnrichment.model_validate(
        {
            "company": "  Acme  ",
            "role": None,
            "location": None,
            "employmentType": None,
            "seniority": "LEAD",
            "remoteType": "REMOTE",
            "salaryMin": 1000,
            "salaryMax": 2000,
            "currency": "USD",
            "skills": [" Go "],
        }
    )
    assert ai.company == "Acme"
    assert ai.skills == ["Go"]


def test_ai_enrichment_rejects_blank_company():
    with pytest.raises(ValidationError):
        AIEnrichment.model_validate(
            {
                "company": "   ",
                "role": None,
                "location": None,
                "employmentType": None,
                "seniority": None,
                "remoteType": None,
                "salaryMin": None,
                "salaryMax": None,
                "currency": None,
                "skills": [],
            }
        )


@pytest.mark.parametrize(
    "url",
    [
        "https://www.linkedin.com/jobs/view/123",
        "http://example.com/job?id=1",
    ],
)
def test_import_request_accepts_http_urls(url):
    request = ImportRequest(linkedin_url=url)
    assert request.linkedin_url == url
    assert request.job_text is None


@pytest.mark.parametrize("url", ["not-a-url", "ftp://example.com/job", ""])
def test_import_request_rejects_invalid_urls(url):
    with pytest.raises(ValidationError):
        ImportRequest(linkedin_url=url)


def test_import_request_rejects_long_text():
    with pytest.raises(ValidationError):
        ImportRequest(linkedin_url="https://example.com", job_text="x" * 12001)


def test_enrich_request_requires_text():
    with pytest.raises(ValidationError, match="Job text is required"):
        EnrichRequest(job_text="   ")


def test_enrich_request_optional_url():
    request = EnrichRequest(job_text="Role: Engineer")
    assert request.linkedin_url is None

    with pytest.raises(ValidationError):
        EnrichRequest(job_text="Role: Engineer", linkedin_url="nope")
