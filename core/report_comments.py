# core/report_comments.py
"""
Short narrative text from the generative-language API.

Both entry points degrade instead of raising: any transport or service
error becomes a fixed fallback string shown to the user as-is.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from core.settings import load_settings

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT = "Good attendance, average participation."
REPORT_UNAVAILABLE = "AI Service Unavailable."
REPORT_EMPTY = "Could not generate report."
SUMMARY_ERROR = "Error generating summary."


def build_report_prompt(student: Dict[str, Any], context: str) -> str:
    name = f"{student.get('first_name', '')} {student.get('last_name', '')}".strip()
    assignment = "Assigned to a class" if student.get("class_id") else "Unassigned"
    return (
        f"Write a concise, professional academic report comment for a student named {name}.\n"
        f"Details:\n"
        f"- Grade/Class context: {assignment}\n"
        f"- Teacher Notes/Context: {context}\n\n"
        f"Keep it under 50 words. Focus on growth and behavior."
    )


def build_bio_prompt(teacher: Dict[str, Any]) -> str:
    return (
        f"Summarize the professional profile of {teacher.get('full_name', '')}, "
        f"who has qualifications: {teacher.get('qualifications') or 'not listed'}. "
        f"Format as a short bio for the school website."
    )


class ReportCommentGenerator:
    """
    Wraps one generative model. ``model`` is anything with
    ``generate_content(prompt)`` returning an object with ``.text``; when it
    is None a Gemini model is created from the API key on first use.
    """

    def __init__(self, api_key: str = "", model_name: str = "gemini-2.5-flash", model: Any = None):
        self.api_key = api_key
        self.model_name = model_name
        self._model = model

    def _get_model(self):
        if self._model is None:
            if not self.api_key:
                raise RuntimeError("No generative-language API key configured")
            import google.generativeai as genai
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    def _generate(self, prompt: str) -> str:
        response = self._get_model().generate_content(prompt)
        return (getattr(response, "text", "") or "").strip()

    def student_report(self, student: Dict[str, Any], context: Optional[str] = None) -> str:
        try:
            text = self._generate(build_report_prompt(student, context or DEFAULT_CONTEXT))
        except Exception as e:
            logger.error("Report generation failed: %s", e)
            return REPORT_UNAVAILABLE
        return text or REPORT_EMPTY

    def teacher_bio(self, teacher: Dict[str, Any]) -> str:
        try:
            return self._generate(build_bio_prompt(teacher))
        except Exception as e:
            logger.error("Profile summary failed: %s", e)
            return SUMMARY_ERROR


_GENERATOR: Optional[ReportCommentGenerator] = None


def get_generator() -> ReportCommentGenerator:
    global _GENERATOR
    if _GENERATOR is None:
        settings = load_settings()
        _GENERATOR = ReportCommentGenerator(settings.genai.api_key, settings.genai.model)
    return _GENERATOR


def generate_student_report_comment(student: Dict[str, Any], context: Optional[str] = None) -> str:
    return get_generator().student_report(student, context)


def summarize_teacher_profile(teacher: Dict[str, Any]) -> str:
    return get_generator().teacher_bio(teacher)
