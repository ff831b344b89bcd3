"""
Resume generation adapter.

Turns a free-text prompt into resume field data: one call to the Gemini API,
then best-effort recovery of a JSON object from whatever text comes back.
Malformed model output never fails the request; it degrades to a placeholder
structure carrying the raw text as the summary.
"""

import json
import logging
import re
from typing import Any, Dict, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from app.core.errors import ConfigurationError, UpstreamError, ValidationError
from app.services.resume_normalization import empty_resume_fields

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY_LENGTH = 500

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
# first {...} region, tolerating one level of nested braces
_OBJECT_SPAN = re.compile(r"\{[^{}]*(?:\{[^{}]*\}[^{}]*)*\}")


def build_resume_prompt(user_prompt: str, template: str = "modern") -> str:
    return f"""You are a professional resume writer. Generate structured resume data in JSON format.

Create a professional resume based on the following information. Format it as a structured JSON object with the following sections:
- personalInfo (fullName, email, phone, summary)
- experience (array of work experiences)
- education (array of educational background)
- skills (technical, soft, languages)
- projects (array of relevant projects)
- certifications (array of certifications)

User input: {user_prompt}

The resume will be rendered with the "{template}" template.

Please create a professional resume with the following structure:
{{
  "personalInfo": {{
    "fullName": "string",
    "email": "string",
    "phone": "string",
    "summary": "string"
  }},
  "experience": [
    {{
      "company": "string",
      "position": "string",
      "startDate": "string",
      "description": "string"
    }}
  ],
  "skills": {{
    "technical": ["string"],
    "soft": ["string"]
  }}
}}

Make it professional, concise, and tailored for job applications. Focus on achievements and measurable results. Return only valid JSON."""


def fallback_resume_fields(raw_text: str) -> Dict[str, Any]:
    return empty_resume_fields(summary=(raw_text or "")[:FALLBACK_SUMMARY_LENGTH])


def extract_json_span(text: str) -> str:
    """Pick the part of a model reply most likely to be the JSON payload."""
    fenced = _FENCED_BLOCK.search(text)
    if fenced:
        return fenced.group(1)
    span = _OBJECT_SPAN.search(text)
    if span:
        return span.group(0)
    return text


def extract_resume_json(text: str) -> Dict[str, Any]:
    """Recover a JSON object from a model reply, falling back to a
    placeholder structure when nothing parses."""
    if not text:
        return fallback_resume_fields("")

    # a bare JSON reply needs no span hunting (and may nest deeper than the regex allows)
    candidates = [text.strip(), extract_json_span(text)]
    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except (json.JSONDecodeError, TypeError):
            continue
        if isinstance(data, dict):
            return data

    logger.warning(f"Could not parse JSON from model reply ({len(text)} chars); using fallback structure")
    return fallback_resume_fields(text)


class ResumeGenerator:
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        timeout_seconds: float = 60.0,
        client: Optional[genai.Client] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds
        self._client = client

    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(self.timeout_seconds * 1000)),
            )
        return self._client

    async def generate(self, prompt: Optional[str], template: str = "modern") -> Dict[str, Any]:
        if not prompt or not prompt.strip():
            raise ValidationError("Prompt is required for AI generation")

        if not self.api_key or not self.api_key.strip():
            raise ConfigurationError(
                "GEMINI_API_KEY is not configured. Please set the environment variable."
            )

        instruction = build_resume_prompt(prompt, template)
        logger.info(f"Calling Gemini model {self.model} (prompt={len(instruction)} chars, template={template})")

        text = await self._complete(instruction)
        logger.debug(f"Gemini reply received: {len(text)} chars")
        return extract_resume_json(text)

    async def _complete(self, instruction: str) -> str:
        try:
            response = await self.client().aio.models.generate_content(
                model=self.model,
                contents=instruction,
            )
        except genai_errors.APIError as e:
            logger.error(f"Gemini API error: {e.message} (code: {e.code})")
            raise UpstreamError(
                "Failed to generate AI resume",
                detail=f"Gemini API error: {e.message} (code: {e.code})",
                status_code=500,
            ) from e
        except Exception as e:
            logger.exception("Gemini API call failed")
            raise UpstreamError("Failed to generate AI resume", detail=str(e), status_code=500) from e

        text = response.text if response is not None else None
        if not text or not text.strip():
            logger.error("Empty response from Gemini API")
            raise UpstreamError(
                "Failed to generate AI resume",
                detail="Empty response from Gemini API",
                status_code=500,
            )
        return text
