from job_importer.merge import COMPANY_WARNING, ROLE_WARNING, merge_linkedin_import_fields
from job_importer.models import PartialFields

EMPTY = PartialFields()


def test_all_null_sources_still_set_job_url(linkedin_url):
    """Test that merging two empty sources keeps the URL and warns about company and role."""
    merged = merge_linkedin_import_fields(EMPTY, EMPTY, linkedin_url)

    assert merged.job_url == linkedin_url
    assert len(merged.warnings) >= 2
    assert merged.warnings == [COMPANY_WARNING, ROLE_WARNING]
    assert merged.is_usable is False


def test_html_values_win(linkedin_url):
    from_html = PartialFields(
        company="EY", role="Software Engineer", location="Greece", job_url=linkedin_url
    )
    from_text = PartialFields(company="Deloitte", role="Backend Engineer", location="Remote")

    merged = merge_linkedin_import_fields(from_html, from_text, "https://other.example.com")

    assert merged.company == "EY"
    assert merged.role == "Software Engineer"
    assert merged.location == "Greece"
    assert merged.job_url == linkedin_url
    assert merged.warnings == []


def test_text_fills_missing_html_fields(linkedin_url):
    from_html = PartialFields(role="Software Engineer", job_url=linkedin_url)
    from_text = PartialFields(company="Deloitte", role="Other Role", location="Athens")

    merged = merge_linkedin_import_fields(from_html, from_text, linkedin_url)

    assert merged.role == "Software Engineer"
    assert merged.company == "Deloitte"
    assert merged.location == "Athens"
    assert merged.warnings == []


def test_only_role_warning_when_company_found(linkedin_url):
    merged = merge_linkedin_import_fields(PartialFields(company="Acme"), EMPTY, linkedin_url)

    assert merged.warnings == [ROLE_WARNING]
    assert merged.is_usable is True


def test_missing_location_produces_no_warning(linkedin_url):
    merged = merge_linkedin_import_fields(
        PartialFields(company="Acme", role="Engineer"), EMPTY, linkedin_url
    )

    assert merged.location is None
    assert merged.warnings == []


def test_serializes_with_camel_case_keys(linkedin_url):
    merged = merge_linkedin_import_fields(EMPTY, EMPTY, linkedin_url)

    data = merged.model_dump(by_alias=True)

    assert data["jobUrl"] == linkedin_url
    assert set(data) == {"company", "role", "location", "jobUrl", "warnings"}
