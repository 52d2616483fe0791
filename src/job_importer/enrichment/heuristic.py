import re

from job_importer.models import (
    MAX_SKILLS,
    EmploymentType,
    EnrichmentFields,
    RemoteType,
    Seniority,
)
from job_importer.parsers.text_parser import parse_role_and_company
from job_importer.text import classify, clean, first_match

LOCATION_LABEL_RE = re.compile(
    r"\b(?:location|based in|located in)\b\s*[:\-]?\s*(.+)", re.IGNORECASE
)
REMOTE_RE = re.compile(r"\bremote\b", re.IGNORECASE)
INTERN_RE = re.compile(r"\bintern(?:ship)?\b", re.IGNORECASE)

# Each list is evaluated top to bottom; the first matching keyword decides.
REMOTE_TYPE_RULES: list[tuple[re.Pattern[str], RemoteType]] = [
    (re.compile(r"\bhybrid\b", re.IGNORECASE), "HYBRID"),
    (REMOTE_RE, "REMOTE"),
    (re.compile(r"\b(?:on-site|onsite)\b", re.IGNORECASE), "ONSITE"),
]

EMPLOYMENT_TYPE_RULES: list[tuple[re.Pattern[str], EmploymentType]] = [
    (INTERN_RE, "INTERNSHIP"),
    (re.compile(r"\bcontract\b", re.IGNORECASE), "CONTRACT"),
    (re.compile(r"\bpart[- ]?time\b", re.IGNORECASE), "PART_TIME"),
    (re.compile(r"\bfull[- ]?time\b", re.IGNORECASE), "FULL_TIME"),
]

SENIORITY_RULES: list[tuple[re.Pattern[str], Seniority]] = [
    (INTERN_RE, "INTERN"),
    (re.compile(r"\bjunior\b", re.IGNORECASE), "JUNIOR"),
    (re.compile(r"\bmid\b", re.IGNORECASE), "MID"),
    (re.compile(r"\bsenior\b", re.IGNORECASE), "SENIOR"),
    (re.compile(r"\blead\b", re.IGNORECASE), "LEAD"),
]

# Optional currency, then "min - max" where each side is 2-3 digits with an
# optional ",ddd" / ".ddd" thousands group. Other grouping styles such as
# "80 500" are not recognised.
SALARY_RE = re.compile(
    r"(\b[A-Z]{3}\b|\$|€|£)?\s?"
    r"(?<!\d)(\d{2,3})(?:[.,](\d{3}))?(?!\d)"
    r"\s*[-–]\s*[$€£]?"
    r"(?<!\d)(\d{2,3})(?:[.,](\d{3}))?(?!\d)"
)

CURRENCY_SYMBOLS = {"$": "USD", "€": "EUR", "£": "GBP"}

SKILL_KEYWORDS = [
    "TypeScript",
    "JavaScript",
    "React",
    "Next.js",
    "Node.js",
    "Python",
    "Java",
    "C#",
    "SQL",
    "AWS",
    "GCP",
    "Azure",
    "Docker",
    "Kubernetes",
]
SKILLS_RE = re.compile(
    r"(?<!\w)(?:" + "|".join(re.escape(skill) for skill in SKILL_KEYWORDS) + r")(?!\w)",
    re.IGNORECASE,
)


def _salary_amount(major: str, minor: str | None) -> int | None:
    amount = int(major) * 1000 + int(minor) if minor else int(major)
    return amount or None


def parse_salary(text: str) -> tuple[int | None, int | None, str | None]:
    """Return (min, max, currency) from the first salary range in the text."""
    match = SALARY_RE.search(text)
    if not match:
        return None, None, None

    symbol, min_major, min_minor, max_major, max_minor = match.groups()
    currency = CURRENCY_SYMBOLS.get(symbol, symbol) if symbol else None
    return _salary_amount(min_major, min_minor), _salary_amount(max_major, max_minor), currency


def extract_skills(text: str) -> list[str]:
    """Allow-listed skills in scan order, deduplicated ignoring case, first casing kept."""
    skills: list[str] = []
    seen: set[str] = set()
    for match in SKILLS_RE.finditer(text):
        skill = clean(match.group(0))
        if not skill or skill.casefold() in seen:
            continue
        seen.add(skill.casefold())
        skills.append(skill)
    return skills[:MAX_SKILLS]


def parse_enrichment_location(text: str) -> str | None:
    labeled = first_match(text, [LOCATION_LABEL_RE])
    if labeled:
        return labeled
    return "Remote" if REMOTE_RE.search(text) else None


def heuristic_job_enrichment(job_text: str) -> EnrichmentFields:
    """
    Classify a job description with keyword and regex heuristics.
    Every field is filled; no signal means None, UNKNOWN or OTHER.
    """
    normalized = (job_text or "").strip()
    role, company = parse_role_and_company(normalized)
    salary_min, salary_max, currency = parse_salary(normalized)

    return EnrichmentFields(
        company=company,
        role=role,
        location=parse_enrichment_location(normalized),
        employment_type=classify(normalized, EMPLOYMENT_TYPE_RULES, "OTHER"),
        seniority=classify(normalized, SENIORITY_RULES, "UNKNOWN"),
        remote_type=classify(normalized, REMOTE_TYPE_RULES, "UNKNOWN"),
        salary_min=salary_min,
        salary_max=salary_max,
        currency=currency,
        skills=extract_skills(normalized),
    )
