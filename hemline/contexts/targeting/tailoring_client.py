"""
AI tailoring collaborator: one LLM request per tailoring run.

Builds the prompts, makes a single provider call (never retried), parses the JSON body
and validates it strictly. Every failure surfaces as an UpstreamServiceError with a
message specific to its cause.
"""

import re
from typing import Optional

from hemline.contexts.targeting.ai_response import (
    AI_SERVICE,
    TailoringResponse,
    validate_tailoring_response,
)
from hemline.contexts.targeting.logger import _log_debug, _log_error, _log_info
from hemline.contexts.targeting.prompts import SYSTEM_PROMPT, build_user_prompt
from hemline.exceptions import UpstreamServiceError
from hemline.utils.llm import LLMProvider, get_provider, parse_json_object

_REGION_BLOCK_RE = re.compile(r"country|region|territory", re.IGNORECASE)


def _api_error(error: Exception, provider_name: str) -> UpstreamServiceError:
    """Map a provider SDK exception to a specific UpstreamServiceError."""
    status = getattr(error, "status_code", None)
    detail = str(error)

    if status == 401:
        message = f"Invalid API key for {provider_name}. Please check your environment variables."
    elif status == 403 and _REGION_BLOCK_RE.search(detail):
        message = (
            f"{provider_name} API is not available in your region. Configure an alternative "
            "endpoint (OPENAI_BASE_URL) or provider."
        )
    elif status == 403:
        message = f"{provider_name} API access forbidden. Please check your API key and account status."
    elif status == 429:
        message = f"{provider_name} API rate limit exceeded. Please try again later."
    else:
        message = f"{provider_name} API error: {type(error).__name__}"

    return UpstreamServiceError(message, service=AI_SERVICE, detail=detail)


def request_tailoring(
    job_title: str,
    job_description: str,
    resume_text: str,
    provider: Optional[LLMProvider] = None,
) -> TailoringResponse:
    """
    Ask the AI collaborator for scoped resume improvements.

    Args:
        job_title: Target job title
        job_description: Target job description
        resume_text: Plain resume text
        provider: LLM provider (default: get_provider() from environment)

    Returns:
        Validated TailoringResponse

    Raises:
        UpstreamServiceError: Provider not configured, API failure, empty or
            unparseable response, or failed validation
    """
    if provider is None:
        try:
            provider = get_provider()
        except (ValueError, ImportError) as e:
            raise UpstreamServiceError(
                "AI provider is not configured", service=AI_SERVICE, detail=str(e)
            ) from e

    user_prompt = build_user_prompt(job_title, job_description, resume_text)
    _log_info(f"Requesting tailoring from {provider.name}")
    _log_debug(f"Prompt size: {len(SYSTEM_PROMPT) + len(user_prompt)} characters")

    try:
        response = provider.generate(SYSTEM_PROMPT, user_prompt)
    except Exception as e:
        error = _api_error(e, provider.name)
        _log_error(error.message)
        raise error from e

    _log_debug(f"Tokens: {response.input_tokens} in, {response.output_tokens} out")

    if not response.content or not response.content.strip():
        raise UpstreamServiceError(f"{provider.name} returned an empty response", service=AI_SERVICE)

    data = parse_json_object(response.content)
    if data is None:
        raise UpstreamServiceError(
            f"Failed to parse {provider.name} response as JSON",
            service=AI_SERVICE,
            detail=response.content,
        )

    tailoring = validate_tailoring_response(data)
    _log_info(
        f"Tailoring received: {len(tailoring.tailored_experience)} experience entries, "
        f"{len(tailoring.ats_keywords.all_keywords())} ATS keywords"
    )
    return tailoring
