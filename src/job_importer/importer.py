import logging

from job_importer.fetcher import fetch_job_page
from job_importer.merge import merge_linkedin_import_fields
from job_importer.models import ExtractedFields, PartialFields, TopCard
from job_importer.parsers.html_parser import parse_linkedin_html, parse_top_card
from job_importer.parsers.text_parser import parse_linkedin_job_text
from job_importer.text import first_non_empty

logger = logging.getLogger(__name__)

NOT_USABLE_MESSAGE = "Could not extract company/role from this URL. Paste job text and try again."


def fill_from_top_card(fields: PartialFields, top_card: TopCard) -> PartialFields:
    """Fill fields the title/meta parse missed. Never overrides a found value."""
    return fields.model_copy(
        update={
            "role": first_non_empty(fields.role, top_card.role),
            "company": first_non_empty(fields.company, top_card.company),
            "location": first_non_empty(fields.location, top_card.location),
        }
    )


def extract_job_fields(
    linkedin_url: str,
    html: str = "",
    job_text: str | None = None,
) -> ExtractedFields:
    """Parse already-available HTML and text into one merged record."""
    top_card = parse_top_card(html)
    from_html = fill_from_top_card(parse_linkedin_html(html, linkedin_url), top_card)
    from_job_text = parse_linkedin_job_text(job_text or top_card.description)
    return merge_linkedin_import_fields(from_html, from_job_text, linkedin_url)


async def import_job(
    linkedin_url: str,
    job_text: str | None = None,
    html: str | None = None,
) -> ExtractedFields:
    """
    Import a job posting: fetch the page unless HTML is supplied, then
    parse and merge. Always returns a record; check `is_usable`.
    """
    if html is None:
        html = await fetch_job_page(linkedin_url)

    fields = extract_job_fields(linkedin_url, html=html, job_text=job_text)

    if fields.is_usable:
        logger.info(
            f"Imported job from {linkedin_url} "
            f"(company: {bool(fields.company)}, role: {bool(fields.role)}, "
            f"location: {bool(fields.location)})"
        )
    else:
        logger.warning(f"No company or role detected for {linkedin_url}")
    return fields
