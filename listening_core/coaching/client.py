"""Client for an OpenAI-compatible chat completions endpoint."""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import requests

from ..config import (
    COACH_API_KEY_ENV,
    COACH_API_URL,
    COACH_MAX_TOKENS,
    COACH_MODEL,
    COACH_TEMPERATURE,
    COACH_TIMEOUT,
)
from ..errors import CoachServiceError

logger = logging.getLogger(__name__)


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Parse the outermost {...} in ``text``; None when there is no valid object."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        parsed = json.loads(text[start:end + 1])
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


class CoachClient:
    """Sends one system + user prompt pair and returns the JSON object in the reply."""

    def __init__(
        self,
        api_key: str,
        api_url: str = COACH_API_URL,
        model: str = COACH_MODEL,
        timeout: float = COACH_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_env(cls) -> Optional["CoachClient"]:
        """Client configured from the environment, or None when no API key is set."""
        api_key = os.getenv(COACH_API_KEY_ENV)
        if not api_key:
            return None
        return cls(api_key=api_key)

    def complete_json(self, system: str, user: str) -> Dict[str, Any]:
        """Run one completion and return the parsed JSON object (empty if unparsable).

        Raises:
            CoachServiceError: Network failure or a non-200 response
        """
        payload = {
            "model": self.model,
            "temperature": COACH_TEMPERATURE,
            "max_tokens": COACH_MAX_TOKENS,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            response = self.session.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise CoachServiceError(f"Could not reach coaching service: {e}") from e

        if response.status_code != 200:
            raise CoachServiceError(f"Coaching service returned error: {response.status_code} - {response.text}")

        try:
            content = response.json()["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise CoachServiceError(f"Unexpected coaching service response: {e}") from e

        parsed = extract_json_object(content)
        if parsed is None:
            logger.debug("Coaching reply had no JSON object: %.200s", content)
            return {}
        return parsed
