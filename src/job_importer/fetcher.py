import logging

import httpx

logger = logging.getLogger(__name__)

HTTP_TIMEOUT = 8.0  # seconds
USER_AGENT = "Mozilla/5.0 (compatible; JobImporterBot/1.0; +https://github.com)"
ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


async def fetch_job_page(url: str, timeout: float = HTTP_TIMEOUT) -> str:
    """
    Download a job posting page. Best effort: any failure is logged and
    an empty string is returned so parsing can continue on pasted text.
    """
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT, "Accept": ACCEPT},
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
    except httpx.HTTPError as e:
        logger.error(f"Failed to fetch job page {url}: {e}")
        return ""

    if not response.is_success:
        logger.warning(f"Job page {url} returned HTTP {response.status_code}")
        return ""

    logger.debug(f"Fetched {len(response.text)} characters from {url}")
    return response.text
