"""Service holding the loaded content document and its answer key."""

from __future__ import annotations

import copy
import logging

from live_quiz.constants.quiz_constants import PASSWORD_SETTING, PUBLIC_SETTINGS
from live_quiz.core.errors import ValidationError
from live_quiz.core.markdown_renderer import render_prompt
from live_quiz.core.models import QuizQuestion

logger = logging.getLogger(__name__)

_SCALARS = (str, int, float)


class QuizRepository:
    """Keeps the questions, answer key and free-text content of one document."""

    def __init__(self) -> None:
        self._document: dict = {}
        self._questions: tuple[QuizQuestion, ...] = ()
        self._answer_key: tuple[int, ...] = ()

    def load_document(self, document: dict, *, strict: bool = False) -> None:
        """Replace the current content; nothing changes if the document is invalid."""
        self.install(prepare_document(document, strict=strict))

    def install(self, prepared: dict) -> None:
        """Swap in a document already checked by :func:`prepare_document`."""
        document = dict(prepared)
        questions = tuple(document.pop("_questions"))
        self._document = document
        self._questions = questions
        self._answer_key = tuple(q.correct_option_index for q in questions)
        logger.info(
            "Content loaded: %d questions, answer key %s",
            len(self._questions),
            list(self._answer_key),
        )

    def get_questions(self) -> list[QuizQuestion]:
        return list(self._questions)

    def get_question_count(self) -> int:
        return len(self._questions)

    def get_answer_key(self) -> tuple[int, ...]:
        return self._answer_key

    def get_admin_password(self) -> str | None:
        password = self._settings().get(PASSWORD_SETTING)
        return str(password) if password else None

    def ui_text(self, key: str, default: str) -> str:
        texts = self._document.get("ui_texts") or {}
        value = texts.get(key)
        return str(value) if value else default

    def public_content(self) -> dict[str, object]:
        """Content safe for participants: no answer key, no password."""
        settings = self._settings()
        return {
            "settings": {key: settings.get(key, False) for key in PUBLIC_SETTINGS},
            "questions": [
                {
                    "q": question.prompt,
                    "q_html": render_prompt(question.prompt),
                    "options": list(question.options),
                }
                for question in self._questions
            ],
            "anecdotes": list(self._document.get("anecdotes") or []),
            "ui_texts": dict(self._document.get("ui_texts") or {}),
        }

    def admin_content(self) -> dict:
        """The stored document as written, minus the password."""
        document = copy.deepcopy(self._document)
        settings = document.get("settings")
        if isinstance(settings, dict):
            settings.pop(PASSWORD_SETTING, None)
        return document

    def _settings(self) -> dict:
        return self._document.get("settings") or {}


def prepare_document(document: dict, *, strict: bool = False) -> dict:
    """Validate a raw content document and derive its questions.

    Returns a deep copy of ``document`` with an extra ``_questions`` entry;
    the caller's mapping is never modified.
    """
    if not isinstance(document, dict):
        raise ValidationError("Content document must be a mapping.")
    prepared = copy.deepcopy(document)

    raw_questions = prepared.get("questions") or []
    if not isinstance(raw_questions, list):
        raise ValidationError("'questions' must be a list.")
    for key in ("settings", "ui_texts"):
        if prepared.get(key) is not None and not isinstance(prepared[key], dict):
            raise ValidationError(f"'{key}' must be a mapping.")
    if prepared.get("anecdotes") is not None and not isinstance(prepared["anecdotes"], list):
        raise ValidationError("'anecdotes' must be a list.")

    prepared["_questions"] = [
        _prepare_question(position, raw, strict=strict)
        for position, raw in enumerate(raw_questions)
    ]
    return prepared


def _prepare_question(position: int, raw: object, *, strict: bool) -> QuizQuestion:
    if not isinstance(raw, dict):
        raise ValidationError(f"Question {position + 1} must be a mapping.")
    prompt = raw.get("q")
    if not isinstance(prompt, str):
        raise ValidationError(f"Question {position + 1} is missing its text ('q').")
    options = raw.get("options") or []
    if not isinstance(options, list) or not all(isinstance(o, _SCALARS) for o in options):
        raise ValidationError(f"Question {position + 1} options must be a list of text.")

    # Unquoted YAML scalars (numbers, years) load as non-strings.
    correct_text = raw.get("correct_option_text")
    if correct_text is not None:
        if not isinstance(correct_text, _SCALARS):
            raise ValidationError(f"Question {position + 1} correct option must be text.")
        correct_text = str(correct_text)
    merged = [str(option) for option in options]
    if correct_text and correct_text.strip() and correct_text not in merged:
        merged.append(correct_text)

    index = _resolve_correct_index(merged, correct_text)
    if index is None:
        message = (
            f"Correct option {correct_text!r} cannot be resolved for question "
            f"{position + 1}: {prompt!r}"
        )
        if strict:
            raise ValidationError(message)
        logger.warning("%s; falling back to option 0", message)
        index = 0

    return QuizQuestion(
        position=position,
        prompt=prompt,
        options=merged,
        correct_option_text=correct_text,
        correct_option_index=index,
    )


def _resolve_correct_index(options: list[str], correct_text: str | None) -> int | None:
    if not correct_text or not correct_text.strip():
        return None
    if options.count(correct_text) != 1:
        return None
    return options.index(correct_text)
