import pytest

from job_importer.parsers.text_parser import parse_linkedin_job_text, parse_role_and_company


def test_labeled_fields():
    """Test that explicit labels are used for role, company and location."""
    text = """
    Role: Backend Engineer
    Company: Deloitte
    Location: Thessaloniki
    """

    fields = parse_linkedin_job_text(text)

    assert fields.role == "Backend Engineer"
    assert fields.company == "Deloitte"
    assert fields.location == "Thessaloniki"
    assert fields.job_url is None


def test_labeled_fields_single_string():
    fields = parse_linkedin_job_text(
        "Role: Backend Engineer\nCompany: Deloitte\nLocation: Thessaloniki"
    )

    assert fields.role == "Backend Engineer"
    assert fields.company == "Deloitte"
    assert fields.location == "Thessaloniki"


def test_at_pattern_on_first_line():
    text = "Frontend Developer at Initech\nWe build things.\nRemote friendly."

    fields = parse_linkedin_job_text(text)

    assert fields.role == "Frontend Developer"
    assert fields.company == "Initech"
    assert fields.location == "Remote"


def test_first_and_second_line_fallback():
    text = "  Data Scientist  \n\n  Umbrella Corp \nAthens, Greece"

    fields = parse_linkedin_job_text(text)

    assert fields.role == "Data Scientist"
    assert fields.company == "Umbrella Corp"
    assert fields.location == "Athens, Greece"


def test_labels_beat_first_line():
    text = "Exciting opportunity!\nEmployer: Hooli\nPosition - Site Reliability Engineer"

    role, company = parse_role_and_company(text)

    assert role == "Site Reliability Engineer"
    assert company == "Hooli"


def test_single_line_has_no_company():
    fields = parse_linkedin_job_text("Staff Accountant")
    assert fields.role == "Staff Accountant"
    assert fields.company is None
    assert fields.location is None


@pytest.mark.parametrize("text", [None, "", "   \n  \n"])
def test_empty_text_yields_null_fields(text):
    fields = parse_linkedin_job_text(text)
    assert fields.role is None
    assert fields.company is None
    assert fields.location is None
    assert fields.job_url is None
