import re

from job_importer.text import Normalizer, clean, first_match

# Ordered by confidence: an explicit label, then a work-mode keyword,
# then anything shaped like "City, Region[, Country]".
LOCATION_PATTERNS = [
    re.compile(r"\b(?:location|located in|based in)\b\s*[:\-]?\s*([^\n|.,;]{2,80})", re.IGNORECASE),
    re.compile(r"\b(remote|hybrid|on-site|onsite)\b", re.IGNORECASE),
    re.compile(r"\b([A-Z][A-Za-z.'-]+,\s*[A-Z][A-Za-z.'-]+(?:,\s*[A-Z][A-Za-z.'-]+)?)\b"),
]


def parse_location(text: str | None, normalize: Normalizer = clean) -> str | None:
    """Best-guess location from free text, or None."""
    return first_match(text, LOCATION_PATTERNS, normalize)
