from __future__ import annotations

"""
studyflow/services/recommendations.py

AI study recommendations:
- Groq client built lazily from settings (None when no key is configured)
- activity summary + prompt asking for exactly four recommendations
- strict JSON decode of the model output, field-by-field coercion
- persistence of at most four rows per call
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from fastapi import Depends
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from studyflow import crud
from studyflow.core.config import Settings, get_settings
from studyflow.core.errors import AppError
from studyflow.models.entities import (
    PRIORITIES,
    RECOMMENDATION_TYPES,
    PomodoroSession,
    StudyRecommendation,
    Task,
)

log = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 4
TITLE_MAX = 60
DESCRIPTION_MAX = 200
SUBJECT_MAX = 200

# --- Groq client init ---
_clients: Dict[str, Any] = {}


def get_llm_client(settings: Settings = Depends(get_settings)):
    """Return the Groq client for the configured key, or None when GROQ_API_KEY is not set."""
    if not settings.HAS_GROQ:
        return None
    key = settings.GROQ_API_KEY.strip()
    if key not in _clients:
        from groq import Groq
        _clients[key] = Groq(api_key=key)
        log.info("[LLM] Groq client initialized.")
    return _clients[key]


# --- Prompt ---
SYSTEM_PROMPT = (
    "You are a study advisor AI for students. "
    "Give concise, actionable advice based on their task and focus-session history. "
    "Output strict JSON."
)


def summarize_activity(tasks: Sequence[Task], sessions: Sequence[PomodoroSession]) -> Dict[str, Any]:
    subjects: List[str] = []
    for t in tasks:
        if t.subject and t.subject not in subjects:
            subjects.append(t.subject)
    return {
        "total_tasks": len(tasks),
        "completed_tasks": sum(1 for t in tasks if t.status == "completed"),
        "pending_tasks": sum(1 for t in tasks if t.status == "pending"),
        "study_minutes": sum(s.duration for s in sessions if s.completed),
        "subjects": subjects,
        "session_count": len(sessions),
    }


def build_prompt(summary: Dict[str, Any]) -> str:
    subjects = ", ".join(summary["subjects"]) if summary["subjects"] else "general studies"
    return f"""
Based on this student's data, generate exactly {MAX_RECOMMENDATIONS} study recommendations as a JSON array.

Student data:
- {summary["total_tasks"]} total tasks ({summary["completed_tasks"]} completed, {summary["pending_tasks"]} pending)
- {summary["study_minutes"]} minutes studied total
- Subjects: {subjects}
- {summary["session_count"]} pomodoro sessions

Generate a JSON array with exactly {MAX_RECOMMENDATIONS} objects. Each object must have:
- "title": short actionable title (max {TITLE_MAX} chars)
- "description": helpful advice paragraph (max {DESCRIPTION_MAX} chars)
- "subject": relevant subject or null
- "type": one of "study_tip", "focus", "review", "schedule"
- "priority": one of "low", "medium", "high"

Respond ONLY with the JSON array, no markdown.
""".strip()


# --- Output decoding ---
class RecommendationDraft(BaseModel):
    """One model-proposed recommendation, coerced into storable shape."""

    title: str = "Study Tip"
    description: str = "Keep up the great work!"
    subject: Optional[str] = None
    type: str = "study_tip"
    priority: str = "medium"

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, v):
        return _clip(v, TITLE_MAX) or "Study Tip"

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, v):
        return _clip(v, DESCRIPTION_MAX) or "Keep up the great work!"

    @field_validator("subject", mode="before")
    @classmethod
    def _subject(cls, v):
        return _clip(v, SUBJECT_MAX) or None

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, v):
        return v if v in RECOMMENDATION_TYPES else "study_tip"

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, v):
        return v if v in PRIORITIES else "medium"


def _clip(v: Any, limit: int) -> str:
    if v is None or isinstance(v, (dict, list)):
        return ""
    return str(v).strip()[:limit]


_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def decode_recommendations(content: Optional[str]) -> List[RecommendationDraft]:
    """
    Decode the model reply. The whole reply must be a JSON array (optionally
    wrapped in one markdown fence); anything else yields no recommendations.
    """
    text = (content or "").strip()
    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)
    try:
        data = json.loads(text)
    except ValueError:
        log.warning("[LLM] reply is not valid JSON; discarding: %.200s", text)
        return []
    if not isinstance(data, list):
        log.warning("[LLM] reply is %s, expected a JSON array; discarding", type(data).__name__)
        return []
    drafts = [RecommendationDraft.model_validate(item) for item in data if isinstance(item, dict)]
    return drafts[:MAX_RECOMMENDATIONS]


def _chat_text(client, model: str, messages: List[Dict[str, Any]], *, max_tokens: int = 1024) -> str:
    try:
        resp = client.chat.completions.create(
            model=model,
            temperature=0.4,
            max_tokens=max_tokens,
            messages=messages,
        )
    except Exception as e:
        log.error("[LLM] chat failed: %s", e, exc_info=True)
        raise AppError("Failed to generate recommendations") from e
    if not resp.choices:
        return ""
    return resp.choices[0].message.content or ""


# --- Orchestration ---
def generate_recommendations(db: Session, user_id: str, client, model: str) -> List[StudyRecommendation]:
    tasks = crud.list_tasks(db, user_id)
    sessions = crud.list_sessions(db, user_id)
    summary = summarize_activity(tasks, sessions)

    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_prompt(summary)},
    ]
    drafts = decode_recommendations(_chat_text(client, model, messages))

    created: List[StudyRecommendation] = []
    for d in drafts:
        created.append(crud.create_recommendation(db, user_id, **d.model_dump()))
    log.info("[LLM] stored %d recommendations for %s", len(created), user_id)
    return created
