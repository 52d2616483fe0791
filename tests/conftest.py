import os

import pytest

# Tests run without an enrichment API key unless a test configures one explicitly.
os.environ.pop("OPENAI_API_KEY", None)
os.environ.pop("OPENAI_MODEL", None)
os.environ.pop("OPENAI_BASE_URL", None)

from job_importer import config  # noqa: E402

LINKEDIN_URL = "https://www.linkedin.com/jobs/view/123"


@pytest.fixture
def configure(monkeypatch):
    """
    Set environment variables and swap in a fresh lazy config so the
    new values are picked up. Restored automatically after the test.
    """

    def _configure(**env: str) -> None:
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        monkeypatch.setattr(config, "_cfg", config._Config())

    return _configure


@pytest.fixture
def ai_configured(configure):
    """Configure a fake API key and a deterministic endpoint."""
    configure(
        OPENAI_API_KEY="test-key",
        OPENAI_MODEL="test-model",
        OPENAI_BASE_URL="https://ai.example.com/v1",
    )


@pytest.fixture
def linkedin_url():
    return LINKEDIN_URL


@pytest.fixture
def sample_job_page():
    """A LinkedIn-like job page with title, meta tags and a top card."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Software Engineer - Thessaloniki, Central Macedonia, Greece - EY | LinkedIn</title>
        <meta name="description" content="Join our team. Hybrid working available.">
    </head>
    <body>
        <h1 class="top-card-layout__title">Software Engineer</h1>
        <a class="topcard__org-name-link">EY</a>
        <div class="show-more-less-html__markup">
            We are looking for a Software Engineer with Python and AWS experience.
        </div>
    </body>
    </html>
    """
