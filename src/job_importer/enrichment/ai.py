import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from pydantic import ValidationError

from job_importer import config
from job_importer.enrichment.heuristic import heuristic_job_enrichment
from job_importer.models import AIEnrichment, EnrichmentFields, EnrichmentResult

logger = logging.getLogger(__name__)

ENRICH_TIMEOUT = 10.0  # seconds, hard deadline for the whole request
MAX_INPUT_CHARS = 12000
MAX_ERROR_SNIPPET = 180

SYSTEM_PROMPT = (
    "Extract structured job fields from text. Return only JSON per schema. "
    "Leave unknown fields as null or UNKNOWN."
)

NOT_CONFIGURED_WARNING = "AI enrichment is not configured. Using heuristic extraction."
EMPTY_OUTPUT_WARNING = "AI returned empty output. Using heuristic extraction."
TIMEOUT_WARNING = "AI enrichment timed out. Using heuristic extraction."
TRANSPORT_WARNING = "AI enrichment request could not be completed. Using heuristic extraction."
MALFORMED_JSON_WARNING = "AI returned malformed JSON. Using heuristic extraction."
SCHEMA_WARNING = "AI output did not match the expected schema. Using heuristic extraction."
GENERIC_WARNING = "AI enrichment failed. Using heuristic extraction."

# Checked in order, so the more specific exception types come first.
FAILURE_WARNINGS: list[tuple[type[BaseException], str]] = [
    (TimeoutError, TIMEOUT_WARNING),
    (httpx.TimeoutException, TIMEOUT_WARNING),
    (httpx.HTTPError, TRANSPORT_WARNING),
    (json.JSONDecodeError, MALFORMED_JSON_WARNING),
    (ValidationError, SCHEMA_WARNING),
]

ENRICHMENT_JSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "company": {"type": ["string", "null"], "maxLength": 120},
        "role": {"type": ["string", "null"], "maxLength": 120},
        "location": {"type": ["string", "null"], "maxLength": 120},
        "employmentType": {
            "type": ["string", "null"],
            "enum": ["FULL_TIME", "PART_TIME", "CONTRACT", "INTERNSHIP", "OTHER", None],
        },
        "seniority": {
            "type": ["string", "null"],
            "enum": ["INTERN", "JUNIOR", "MID", "SENIOR", "LEAD", "UNKNOWN", None],
        },
        "remoteType": {
            "type": ["string", "null"],
            "enum": ["REMOTE", "HYBRID", "ONSITE", "UNKNOWN", None],
        },
        "salaryMin": {"type": ["number", "null"]},
        "salaryMax": {"type": ["number", "null"]},
        "currency": {"type": ["string", "null"], "pattern": "^[A-Z]{3}$"},
        "skills": {
            "type": "array",
            "maxItems": 12,
            "items": {"type": "string", "maxLength": 40},
        },
    },
    "required": [
        "company",
        "role",
        "location",
        "employmentType",
        "seniority",
        "remoteType",
        "salaryMin",
        "salaryMax",
        "currency",
        "skills",
    ],
}


class EnrichmentError(Exception):
    """A remote enrichment attempt failed; `warnings` explain why to the user."""

    def __init__(self, *warnings: str) -> None:
        super().__init__(warnings[0] if warnings else GENERIC_WARNING)
        self.warnings = [w for w in warnings if w] or [GENERIC_WARNING]


def build_input_text(job_text: str, linkedin_url: str | None = None) -> str:
    parts = [
        f"LinkedIn URL: {linkedin_url}" if linkedin_url else None,
        "Job description:",
        job_text,
    ]
    return "\n\n".join(part for part in parts if part)[:MAX_INPUT_CHARS]


def build_request_payload(model: str, input_text: str) -> dict[str, Any]:
    """Responses API request asking for strict, schema-shaped JSON output."""
    return {
        "model": model,
        "input": [
            {
                "role": "system",
                "content": [{"type": "input_text", "text": SYSTEM_PROMPT}],
            },
            {
                "role": "user",
                "content": [{"type": "input_text", "text": input_text}],
            },
        ],
        "text": {
            "format": {
                "type": "json_schema",
                "name": "job_enrichment",
                "strict": True,
                "schema": ENRICHMENT_JSON_SCHEMA,
            }
        },
    }


def extract_output_text(payload: Any) -> str | None:
    """
    Pull the model's text out of a Responses API payload.
    Prefers the `output_text` convenience field, then the first non-blank
    content part of `output`.
    """
    if not isinstance(payload, dict):
        return None

    output_text = payload.get("output_text")
    if isinstance(output_text, str) and output_text.strip():
        return output_text

    for item in payload.get("output") or []:
        if not isinstance(item, dict):
            continue
        for part in item.get("content") or []:
            text = part.get("text") if isinstance(part, dict) else None
            if isinstance(text, str) and text.strip():
                return text
    return None


def merge_with_heuristic(ai_result: AIEnrichment, heuristic: EnrichmentFields) -> EnrichmentFields:
    """AI values win when present; skills only when the AI list is non-empty."""

    def pick(ai_value: Any, fallback: Any) -> Any:
        return fallback if ai_value is None else ai_value

    return EnrichmentFields(
        company=pick(ai_result.company, heuristic.company),
        role=pick(ai_result.role, heuristic.role),
        location=pick(ai_result.location, heuristic.location),
        employment_type=pick(ai_result.employment_type, heuristic.employment_type),
        seniority=pick(ai_result.seniority, heuristic.seniority),
        remote_type=pick(ai_result.remote_type, heuristic.remote_type),
        salary_min=pick(ai_result.salary_min, heuristic.salary_min),
        salary_max=pick(ai_result.salary_max, heuristic.salary_max),
        currency=pick(ai_result.currency, heuristic.currency),
        skills=list(ai_result.skills) if ai_result.skills else list(heuristic.skills),
    )


def _describe_failure(error: BaseException) -> str:
    for error_type, warning in FAILURE_WARNINGS:
        if isinstance(error, error_type):
            return warning
    return GENERIC_WARNING


async def enhance_or_fallback(
    baseline: EnrichmentFields,
    producer: Callable[[], Awaitable[AIEnrichment]],
) -> EnrichmentResult:
    """
    Try a remote enhancement and merge it over the local baseline.

    Any failure in the producer returns the baseline unchanged, marked as
    heuristic, with a warning describing what went wrong. Nothing raised by
    the producer escapes this function.
    """
    try:
        enhanced = await producer()
    except EnrichmentError as e:
        logger.warning(f"AI enrichment unavailable: {e}")
        return EnrichmentResult(fields=baseline, source="heuristic", warnings=e.warnings)
    except Exception as e:
        logger.warning(f"AI enrichment failed ({type(e).__name__}): {e}")
        return EnrichmentResult(
            fields=baseline, source="heuristic", warnings=[_describe_failure(e)]
        )

    return EnrichmentResult(
        fields=merge_with_heuristic(enhanced, baseline), source="ai", warnings=[]
    )


async def request_ai_enrichment(
    job_text: str,
    linkedin_url: str | None = None,
    timeout: float = ENRICH_TIMEOUT,
) -> AIEnrichment:
    """
    Ask the Responses API for structured fields. Raises on any failure,
    including a missing API key when called directly; callers are expected
    to go through `enhance_or_fallback`.
    """
    api_key = config.OPENAI_API_KEY
    if not api_key:
        raise EnrichmentError(NOT_CONFIGURED_WARNING)

    url = f"{config.OPENAI_BASE_URL}/responses"
    payload = build_request_payload(config.OPENAI_MODEL, build_input_text(job_text, linkedin_url))
    headers = {"Authorization": f"Bearer {api_key}"}

    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await asyncio.wait_for(
            client.post(url, headers=headers, json=payload), timeout=timeout
        )

    if not response.is_success:
        snippet = response.text[:MAX_ERROR_SNIPPET]
        raise EnrichmentError(
            f"AI enrichment request failed ({response.status_code}). Using heuristic extraction.",
            snippet,
        )

    output_text = extract_output_text(response.json())
    if not output_text:
        raise EnrichmentError(EMPTY_OUTPUT_WARNING)

    return AIEnrichment.model_validate(json.loads(output_text))


async def enrich_job_text(job_text: str, linkedin_url: str | None = None) -> EnrichmentResult:
    """
    Enrich a job description, preferring the AI service and falling back
    to heuristics. Never raises for network or model problems.
    """
    heuristic = heuristic_job_enrichment(job_text)

    if not config.OPENAI_API_KEY:
        logger.info("AI enrichment is not configured, using heuristic extraction.")
        return EnrichmentResult(
            fields=heuristic, source="heuristic", warnings=[NOT_CONFIGURED_WARNING]
        )

    result = await enhance_or_fallback(
        heuristic, lambda: request_ai_enrichment(job_text, linkedin_url)
    )
    logger.info(f"Job text enriched (source: {result.source}, skills: {len(result.fields.skills)})")
    return result
