"""
Quiz question schema

Defines the question record shared by stores and the engine.
"""

from dataclasses import dataclass, field
from typing import Any, Union
import json


QuestionId = Union[int, str]


class QuestionFormatError(ValueError):
    """A question record is malformed."""
    pass


@dataclass(frozen=True)
class Question:
    """A single multiple-choice question. Immutable once created."""
    id: QuestionId
    text: str
    options: tuple[str, ...] = field(default_factory=tuple)
    correct_answer: str = ""

    def __post_init__(self):
        # Lists from JSON are frozen into tuples
        object.__setattr__(self, "options", tuple(self.options))
        if not self.options:
            raise QuestionFormatError(f"Question {self.id!r} has no options")
        if self.correct_answer not in self.options:
            raise QuestionFormatError(
                f"Question {self.id!r}: correct answer {self.correct_answer!r} is not one of its options"
            )
        if len(set(self.options)) != len(self.options):
            raise QuestionFormatError(f"Question {self.id!r} has duplicate options")

    @property
    def correct_index(self) -> int:
        """Index of the correct answer within options."""
        return self.options.index(self.correct_answer)

    def is_correct(self, option_index: int) -> bool:
        """Exact string comparison, no normalization."""
        return self.options[option_index] == self.correct_answer

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "question": self.text,
            "options": list(self.options),
            "answer": self.correct_answer,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        """
        Build a question from a wire record.

        Accepts the backend's field names (question/answer) as well as
        text/correct_answer.
        """
        if not isinstance(data, dict):
            raise QuestionFormatError(f"Expected a question object, got {type(data).__name__}")
        try:
            text = data["question"] if "question" in data else data["text"]
            answer = data["answer"] if "answer" in data else data["correct_answer"]
            options = data["options"]
            question_id = data["id"]
        except KeyError as e:
            raise QuestionFormatError(f"Question record missing field {e}")

        # bool is an int subclass but never a valid id
        if isinstance(question_id, bool) or not isinstance(question_id, (int, str)):
            raise QuestionFormatError(f"Question id must be an int or string, got {question_id!r}")
        if not isinstance(text, str) or not isinstance(answer, str):
            raise QuestionFormatError(f"Question {question_id!r}: question and answer must be strings")
        if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
            raise QuestionFormatError(f"Question {question_id!r}: options must be a list of strings")

        return cls(
            id=question_id,
            text=text,
            options=tuple(options),
            correct_answer=answer,
        )


def parse_questions(payload: Any) -> list[Question]:
    """
    Parse a list of question records.

    Accepts either a bare JSON list or an object with a "questions" list.
    Duplicate ids are rejected since the engine tracks usage by id.

    Raises:
        QuestionFormatError: On malformed payloads
    """
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise QuestionFormatError(f"Invalid question JSON: {e}")

    if isinstance(payload, dict):
        payload = payload.get("questions")
    if not isinstance(payload, list):
        raise QuestionFormatError("Expected a list of questions")

    questions = [Question.from_dict(item) for item in payload]

    seen: set = set()
    for q in questions:
        if q.id in seen:
            raise QuestionFormatError(f"Duplicate question id {q.id!r}")
        seen.add(q.id)

    return questions
