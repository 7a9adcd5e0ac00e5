"""AI tagging of a problem photo: difficulty level and question type."""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from .errors import CategorizationError
from .gemini_client import GeminiClient
from .schemas import PROBLEM_LEVELS, QUESTION_TYPES, CategorizationResult
from .settings import settings

logger = logging.getLogger(__name__)

DEFAULT_PROBLEM_LEVEL = "Mid"
DEFAULT_QUESTION_TYPE = "Computation"

CATEGORIZE_PROMPT = """
Analyze this math problem image (Korean elementary school math) and categorize it.

Fields to determine:
1. problemLevel:
   - "Low": Basic simple problems
   - "Mid": Standard textbook problems
   - "High": Challenging problems requiring multiple steps
   - "Top": Olympiad or very difficult problems

2. questionType:
   - "Concept": Asking for definitions or basic properties
   - "Computation": Pure calculation
   - "Application": Word problems, applying concepts to situations
   - "ProblemSolving": Complex reasoning, spatial puzzle, or deep logic

Return ONLY a raw JSON string (no markdown formatting) with this structure:
{ "problemLevel": "...", "questionType": "..." }
""".strip()

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text).strip()


def parse_reply(text: str) -> Dict[str, Any]:
    """Parse the model reply into a dict holding both fields.

    Raises:
        ValueError: If the reply is not a JSON object with ``problemLevel`` and ``questionType``.
    """
    data = json.loads(strip_code_fences(text))
    if not isinstance(data, dict):
        raise ValueError("reply is not a JSON object")
    missing = [k for k in ("problemLevel", "questionType") if k not in data]
    if missing:
        raise ValueError(f"reply is missing {', '.join(missing)}")
    return data


def normalize(data: Dict[str, Any]) -> CategorizationResult:
    level = data.get("problemLevel")
    qtype = data.get("questionType")
    if level not in PROBLEM_LEVELS:
        logger.info("unknown problemLevel %r, using %s", level, DEFAULT_PROBLEM_LEVEL)
        level = DEFAULT_PROBLEM_LEVEL
    if qtype not in QUESTION_TYPES:
        logger.info("unknown questionType %r, using %s", qtype, DEFAULT_QUESTION_TYPE)
        qtype = DEFAULT_QUESTION_TYPE
    return CategorizationResult(problem_level=level, question_type=qtype)


async def categorize_image(
    image_base64: str,
    mime_type: str = "image/jpeg",
    *,
    models: Optional[List[str]] = None,
    api_key: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CategorizationResult:
    """Ask each candidate model in turn until one returns a usable categorization.

    A failing candidate (unknown model, HTTP error, network error or an
    unparseable reply) is logged and the next one is tried.

    Raises:
        CategorizationError: If no API key is configured or every candidate failed.
    """
    key = api_key or settings.gemini_api_key
    if not key:
        raise CategorizationError("GEMINI_API_KEY is not configured")
    candidates = models if models is not None else settings.gemini_model_candidates
    if not candidates:
        raise CategorizationError("no Gemini models configured")

    # Error text only; httpx messages carry the request URL and with it the API key
    last_error: Optional[str] = None
    for model in candidates:
        client = GeminiClient(key, model=model, transport=transport)
        try:
            raw = await client.generate_with_image(CATEGORIZE_PROMPT, image_base64, mime_type)
            data = parse_reply(raw)
        except httpx.HTTPStatusError as e:
            last_error = f"{model} answered HTTP {e.response.status_code}"
            logger.info("%s, trying next", last_error, extra={"model": model})
            continue
        except httpx.RequestError as e:
            last_error = f"{model} unreachable ({type(e).__name__})"
            logger.info("%s, trying next", last_error, extra={"model": model})
            continue
        except (RuntimeError, ValueError) as e:
            last_error = f"{model} gave an unusable reply ({e})"
            logger.info("%s, trying next", last_error, extra={"model": model})
            continue
        finally:
            await client.aclose()
        logger.debug("categorized with model %s: %s", model, data)
        return normalize(data)

    logger.warning("categorization failed for all %d models", len(candidates))
    raise CategorizationError(f"all {len(candidates)} models failed; last error: {last_error}")
