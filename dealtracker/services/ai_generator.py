import logging
from typing import Any, Dict, List, Optional

from anthropic import Anthropic
from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

SUMMARY_FALLBACK = "Unable to generate summary at this time. Please try again later."
SUMMARY_EMPTY = "Summary generation failed."
REPORT_FALLBACK = "Unable to generate market research at this time. Please try again later."
REPORT_EMPTY = "Report generation failed."

MARKET_REPORT_SECTIONS = [
    "Executive Summary",
    "Company Overview",
    "Market Analysis",
    "Competitive Landscape",
    "Strategic Fit Assessment",
    "Risk Analysis",
    "Recommendation",
]


class AISettings(BaseSettings):
    anthropic_api_key: Optional[str] = None
    ai_model: str = "claude-sonnet-4-20250514"
    summary_max_tokens: int = 200
    report_max_tokens: int = 2000
    ai_timeout_seconds: float = 60.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class TextGenerationError(Exception):
    """Raised when the text generation service cannot produce a completion"""
    pass


class DealNarrativeGenerator:
    """
    Turns structured deal context into narrative text via the Anthropic
    Messages API.

    Built once at startup from ``AISettings`` and shared by request handlers.
    Failures never propagate out of the public methods: they are logged and
    replaced with fixed fallback strings.
    """

    def __init__(self, settings: AISettings, client: Any = None):
        self.settings = settings
        if client is None and settings.anthropic_api_key:
            client = Anthropic(
                api_key=settings.anthropic_api_key,
                max_retries=0,
                timeout=settings.ai_timeout_seconds,
            )
        self._client = client

    def generate_deal_summary(self, context: Dict[str, Any]) -> str:
        """Return a 3-5 sentence executive summary, or the fallback text."""
        prompt = _build_summary_prompt(context)
        try:
            logger.info(f"Requesting deal summary for {context.get('company')}")
            text = self._complete(prompt, self.settings.summary_max_tokens)
        except Exception as e:
            logger.warning(f"Deal summary generation failed: {str(e)}")
            return SUMMARY_FALLBACK
        return text or SUMMARY_EMPTY

    def generate_market_research(self, context: Dict[str, Any]) -> str:
        """Return a multi-section market research report, or the fallback text."""
        prompt = _build_market_research_prompt(context)
        try:
            logger.info(f"Requesting market research for {context.get('company')}")
            text = self._complete(prompt, self.settings.report_max_tokens)
        except Exception as e:
            logger.warning(f"Market research generation failed: {str(e)}")
            return REPORT_FALLBACK
        return text or REPORT_EMPTY

    def _complete(self, prompt: str, max_tokens: int) -> str:
        if self._client is None:
            raise TextGenerationError("ANTHROPIC_API_KEY is not configured")

        message = self._client.messages.create(
            model=self.settings.ai_model,
            max_tokens=max_tokens,
            messages=[
                {
                    "role": "user",
                    "content": prompt
                }
            ]
        )

        response_text = "".join(
            block.text for block in message.content if getattr(block, "type", "text") == "text"
        ).strip()
        logger.info(f"Received completion from Claude API ({len(response_text)} chars)")
        return response_text


def get_narrative_generator(request: Request) -> DealNarrativeGenerator:
    """FastAPI dependency returning the generator created at startup."""
    return request.app.state.narrative_generator


def _fmt_currency(val: Optional[int]) -> str:
    return f"${val:,}"


def _optional_lines(pairs: List[tuple], prefix: str = "") -> str:
    return "\n".join(f"{prefix}{label}: {value}" for label, value in pairs if value)


def _build_summary_prompt(context: Dict[str, Any]) -> str:
    """Build the executive summary prompt; empty fields are left out."""
    investment = context.get("investment_size")
    details = _optional_lines([
        ("Company", context.get("company")),
        ("Website", context.get("website")),
        ("Internal Contact", context.get("internal_contact")),
        ("Business Unit", context.get("business_unit")),
        ("Deal Type", context.get("deal_type")),
        ("Investment Size", _fmt_currency(investment) if investment else None),
        ("Use Case", context.get("use_case")),
        ("Tags", ", ".join(context.get("tags") or [])),
        ("Notes", context.get("notes")),
    ])

    return f"""Please generate a 3-5 sentence executive summary of this potential business deal:

{details}

The summary should be concise, highlight strategic value, and be suitable for executive leadership review."""


def _build_market_research_prompt(context: Dict[str, Any]) -> str:
    """Build the market research prompt with the fixed seven-section outline."""
    details = _optional_lines([
        ("Name", context.get("company")),
        ("Website", context.get("website")),
        ("Our Business Unit", context.get("business_unit")),
        ("Deal Type", context.get("deal_type")),
        ("Use Case", context.get("use_case")),
        ("Tags", ", ".join(context.get("tags") or [])),
        ("Industry", context.get("industry")),
    ], prefix="- ")
    sections = "\n".join(
        f"{number}. {title}" for number, title in enumerate(MARKET_REPORT_SECTIONS, start=1)
    )

    return f"""Generate a comprehensive market research report for {context.get('company')}.

Company Details:
{details}

Please structure your report with the following sections:
{sections}

For each section, provide detailed information that would be useful for our business development team to evaluate this opportunity."""


def is_fallback_text(text: str) -> bool:
    return text in (SUMMARY_FALLBACK, SUMMARY_EMPTY, REPORT_FALLBACK, REPORT_EMPTY)
