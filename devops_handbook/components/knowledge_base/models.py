"""
Knowledge Base Models
Question and Script entries parsed from the study guide
"""
from typing import List, Optional


class Script:
    """A fenced code block inside an answer"""
    def __init__(self, language: str, source: str):
        self.language = language
        self.source = source

    @property
    def is_empty(self) -> bool:
        return not self.source.strip()

    def to_dict(self):
        return {
            'language': self.language,
            'source': self.source,
            'lines': len(self.source.splitlines())
        }

    def __repr__(self):
        return f"Script(language={self.language!r}, lines={len(self.source.splitlines())})"


class Question:
    """One Q&A entry: a prompt plus a prose and/or code answer"""
    def __init__(self, id: str, title: str, answer: str = '',
                 scripts: Optional[List[Script]] = None, number: Optional[int] = None,
                 section: Optional[str] = None):
        self.id = id
        self.title = title
        self.answer = answer
        self.scripts = scripts or []
        self.number = number
        self.section = section

    @property
    def has_answer(self) -> bool:
        """True when there is answer text or at least one non-empty script"""
        if self.answer.strip():
            return True
        return any(not script.is_empty for script in self.scripts)

    def matches(self, term: str) -> bool:
        """Case-insensitive match over title, answer and script source"""
        needle = term.lower()
        if needle in self.title.lower() or needle in self.answer.lower():
            return True
        return any(needle in script.source.lower() for script in self.scripts)

    def to_dict(self, include_body=True):
        data = {
            'id': self.id,
            'number': self.number,
            'title': self.title,
            'section': self.section,
            'has_answer': self.has_answer,
            'script_count': len(self.scripts)
        }
        if include_body:
            data['answer'] = self.answer
            data['scripts'] = [script.to_dict() for script in self.scripts]
        return data

    def __repr__(self):
        return f"Question(id={self.id!r}, title={self.title!r})"


class ValidationIssue:
    """A document-level problem found in one question"""
    def __init__(self, question_id: str, code: str, message: str):
        self.question_id = question_id
        self.code = code
        self.message = message

    def to_dict(self):
        return {
            'question_id': self.question_id,
            'code': self.code,
            'message': self.message
        }

    def __repr__(self):
        return f"ValidationIssue({self.question_id!r}, {self.code!r})"
