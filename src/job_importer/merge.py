from job_importer.models import ExtractedFields, PartialFields
from job_importer.text import first_non_empty

COMPANY_WARNING = "Company could not be detected reliably. Please fill it manually."
ROLE_WARNING = "Role could not be detected reliably. Please fill it manually."


def merge_linkedin_import_fields(
    from_html: PartialFields,
    from_job_text: PartialFields,
    source_url: str,
) -> ExtractedFields:
    """
    Combine HTML- and text-derived candidates. HTML wins per field, the
    source URL backs up the job URL, and unresolved company/role become warnings.
    """
    company = first_non_empty(from_html.company, from_job_text.company)
    role = first_non_empty(from_html.role, from_job_text.role)

    warnings: list[str] = []
    if not company:
        warnings.append(COMPANY_WARNING)
    if not role:
        warnings.append(ROLE_WARNING)

    return ExtractedFields(
        company=company,
        role=role,
        location=first_non_empty(from_html.location, from_job_text.location),
        job_url=first_non_empty(from_html.job_url, source_url),
        warnings=warnings,
    )
