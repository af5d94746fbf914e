from __future__ import annotations

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)

GEMINI_API = "https://generativelanguage.googleapis.com/v1beta"


class AssistantError(Exception):
    pass


def _build_session():
    session = requests.Session()
    retry = Retry(
        total=1,
        backoff_factor=0.5,
        status_forcelist=(502, 503, 504),
        allowed_methods=("POST",),
        raise_on_status=False,
    )
    session.mount("https://", HTTPAdapter(max_retries=retry))
    return session


class GenerativeTextClient:
    def __init__(self, api_key: str, model: str = "gemini-2.0-flash", session=None, timeout: int = 30):
        if not api_key:
            raise ValueError("Missing generative text API key")
        self._api_key = api_key
        self._model = model
        self._session = session or _build_session()
        self._timeout = timeout

    def generate(self, prompt: str) -> str:
        url = f"{GEMINI_API}/models/{self._model}:generateContent"
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        try:
            response = self._session.post(url, params={"key": self._api_key}, json=payload, timeout=self._timeout)
        except requests.RequestException as exc:
            raise AssistantError(f"Could not reach the assistant: {exc}") from exc
        if not response.ok:
            try:
                detail = response.json().get("error", {}).get("message") or response.reason
            except ValueError:
                detail = response.reason
            raise AssistantError(f"Assistant error {response.status_code}: {detail}")
        try:
            body = response.json()
            parts = body["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts).strip()
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise AssistantError("The assistant returned an unexpected response.") from exc
        if not text:
            raise AssistantError("The assistant returned an empty response.")
        return text


def build_day_plan_prompt(schedules, today_iso: str) -> str:
    items = [row for row in schedules if row.get("date") == today_iso]
    items.sort(key=lambda row: row.get("time") or "99:99")
    if not items:
        return (
            f"I have nothing scheduled for {today_iso}. Suggest a short, realistic plan for a "
            "productive and balanced day, as a bulleted list."
        )
    lines = [f"- {row.get('time') or 'any time'}: {row.get('title') or 'Untitled'}" for row in items]
    return (
        f"Here is my schedule for {today_iso}:\n"
        + "\n".join(lines)
        + "\nHelp me plan the day around it: suggest an order, breaks and one focus tip. Keep it brief."
    )


def build_reflection_prompt(accomplishments) -> str:
    items = sorted(accomplishments, key=lambda row: row.get("date") or "", reverse=True)[:20]
    if not items:
        return "I have not logged any accomplishments yet. Give me three small wins I could aim for today."
    lines = [f"- {row.get('date') or ''} {row.get('text') or ''}".strip() for row in items]
    return (
        "These are my recent accomplishments:\n"
        + "\n".join(lines)
        + "\nWrite a short, encouraging reflection on my progress and suggest one next step."
    )


def run_assist(assist_state, client, title: str, prompt: str) -> None:
    assist_state.begin(title)
    try:
        if client is None:
            raise AssistantError("The assistant is not configured.")
        assist_state.response = client.generate(prompt)
    except AssistantError as exc:
        logger.warning("Assistant request failed: %s", exc)
        assist_state.error = str(exc)
    finally:
        assist_state.loading = False
