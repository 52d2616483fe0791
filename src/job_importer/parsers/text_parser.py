import re

from job_importer.models import PartialFields
from job_importer.parsers.location import parse_location
from job_importer.text import clean, clean_lines, first_match, first_non_empty

ROLE_LABEL_RE = re.compile(r"\b(?:role|position|title)\b\s*[:\-]?\s*(.+)", re.IGNORECASE)
COMPANY_LABEL_RE = re.compile(
    r"\b(?:company|employer|organization)\b\s*[:\-]?\s*(.+)", re.IGNORECASE
)
AT_LINE_RE = re.compile(r"^(.+?)\s+at\s+(.+)$", re.IGNORECASE)


def parse_role_and_company(text: str | None) -> tuple[str | None, str | None]:
    """
    Role and company from pasted text: an explicit label wins, then an
    "X at Y" first line, then the first and second lines as-is.
    """
    lines = clean_lines(text)
    first_line = lines[0] if lines else None
    second_line = lines[1] if len(lines) > 1 else None
    at_line = AT_LINE_RE.match(first_line) if first_line else None

    role = first_non_empty(
        first_match(text, [ROLE_LABEL_RE]),
        clean(at_line.group(1)) if at_line else None,
        first_line,
    )
    company = first_non_empty(
        first_match(text, [COMPANY_LABEL_RE]),
        clean(at_line.group(2)) if at_line else None,
        second_line,
    )
    return role, company


def parse_linkedin_job_text(job_text: str | None) -> PartialFields:
    """Derive role/company/location from a pasted job description."""
    if not job_text:
        return PartialFields()

    role, company = parse_role_and_company(job_text)
    return PartialFields(
        role=role,
        company=company,
        location=parse_location(job_text),
        job_url=None,
    )
