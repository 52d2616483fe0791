import re
from collections.abc import Callable

from bs4 import BeautifulSoup, Tag

from job_importer.models import PartialFields, TopCard
from job_importer.parsers.location import parse_location
from job_importer.text import clean_lines, first_non_empty, squash

LINKEDIN_SUFFIX_RE = re.compile(r"\s*\|\s*LinkedIn\s*$", re.IGNORECASE)
AT_SHAPE_RE = re.compile(r"^(.+?)\s+at\s+(.+)$", re.IGNORECASE)
HIRING_SHAPE_RE = re.compile(r"^(.+?)\s+is hiring\s+(.+)$", re.IGNORECASE)

# Selector candidates for the rendered LinkedIn top card, most specific first.
TOP_CARD_SELECTORS = {
    "role": [
        ".job-details-jobs-unified-top-card__job-title h1",
        ".top-card-layout__title",
        "h1",
    ],
    "company": [
        ".job-details-jobs-unified-top-card__company-name a",
        ".job-details-jobs-unified-top-card__company-name",
        ".topcard__org-name-link",
        ".topcard__flavor-row .topcard__flavor",
    ],
    "location": [
        ".job-details-jobs-unified-top-card__bullet",
        ".tvm__text.tvm__text--low-emphasis",
        ".topcard__flavor--bullet",
    ],
    "description": [
        ".jobs-description__content .jobs-box__html-content",
        ".jobs-description-content__text",
        ".show-more-less-html__markup",
        "[data-job-id] .jobs-description",
    ],
}

TitleShape = Callable[[str], PartialFields | None]


def _make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def extract_meta_tag(soup: BeautifulSoup, key: str) -> str | None:
    """
    Return the cleaned content of a <meta> tag whose property or name equals key.
    Attribute order and case do not matter.
    """
    key_re = re.compile(rf"^{re.escape(key)}$", re.IGNORECASE)
    for attr in ("property", "name"):
        for tag in soup.find_all("meta", attrs={attr: key_re}):
            content = squash(str(tag.get("content", "")))
            if content:
                return content
    return None


def extract_title(soup: BeautifulSoup) -> str | None:
    title = soup.find("title")
    if not isinstance(title, Tag):
        return None
    return squash(title.get_text())


def strip_linkedin_suffix(value: str) -> str:
    return LINKEDIN_SUFFIX_RE.sub("", value).strip()


def _at_shape(title: str) -> PartialFields | None:
    """'<role> at <company>'"""
    match = AT_SHAPE_RE.match(title)
    if not match:
        return None
    return PartialFields(role=squash(match.group(1)), company=squash(match.group(2)))


def _hiring_shape(title: str) -> PartialFields | None:
    """'<company> is hiring <role>'"""
    match = HIRING_SHAPE_RE.match(title)
    if not match:
        return None
    return PartialFields(role=squash(match.group(2)), company=squash(match.group(1)))


def _segments_shape(title: str) -> PartialFields | None:
    """'<role> - <location...> - <company>'"""
    segments = [segment for segment in (squash(part) for part in title.split(" - ")) if segment]
    if len(segments) < 2:
        return None
    location = squash(", ".join(segments[1:-1])) if len(segments) >= 3 else None
    return PartialFields(role=segments[0], company=segments[-1], location=location)


# Tried in order; the first shape that parses wins.
TITLE_SHAPES: list[TitleShape] = [_at_shape, _hiring_shape, _segments_shape]


def parse_title(title: str | None) -> PartialFields:
    """Split a job page title into role, company and location."""
    if not title:
        return PartialFields()

    normalized = strip_linkedin_suffix(title)
    for shape in TITLE_SHAPES:
        fields = shape(normalized)
        if fields is not None:
            return fields

    return PartialFields(role=squash(normalized))


def parse_linkedin_html(html: str, source_url: str) -> PartialFields:
    """
    Derive role/company/location from a job page's <title> and meta tags.
    The job URL is always the supplied source URL.
    """
    soup = _make_soup(html)
    title = first_non_empty(extract_meta_tag(soup, "og:title"), extract_title(soup))
    title_fields = parse_title(title)
    description = first_non_empty(
        extract_meta_tag(soup, "og:description"),
        extract_meta_tag(soup, "description"),
    )

    return PartialFields(
        role=title_fields.role,
        company=title_fields.company,
        location=first_non_empty(title_fields.location, parse_location(description, squash)),
        job_url=source_url,
    )


def _text_from_selectors(
    soup: BeautifulSoup, selectors: list[str], multiline: bool = False
) -> str | None:
    for selector in selectors:
        node = soup.select_one(selector)
        if node is None:
            continue
        if multiline:
            text = "\n".join(clean_lines(node.get_text("\n"), squash)) or None
        else:
            text = squash(node.get_text(" "))
        if text:
            return text
    return None


def parse_top_card(html: str) -> TopCard:
    """Read role/company/location/description from the rendered job top card."""
    soup = _make_soup(html)
    # BeautifulSoup has already decoded entities, so only whitespace is normalized.
    return TopCard(
        role=_text_from_selectors(soup, TOP_CARD_SELECTORS["role"]),
        company=_text_from_selectors(soup, TOP_CARD_SELECTORS["company"]),
        location=_text_from_selectors(soup, TOP_CARD_SELECTORS["location"]),
        # Keep line breaks so the description parses like pasted text.
        description=_text_from_selectors(soup, TOP_CARD_SELECTORS["description"], multiline=True),
    )
