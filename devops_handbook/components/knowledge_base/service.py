"""
Knowledge Base Service
Loads the study guide once and answers lookups against it
"""
import logging
import threading

from ...core.errors import QuestionNotFoundError
from .. import register_component
from .parser import load_guide
from .validation import validate_questions

logger = logging.getLogger(__name__)


@register_component('knowledge_base')
class KnowledgeBaseService:
    """Service for the Knowledge Base component"""

    def __init__(self, guide_path):
        self.guide_path = str(guide_path)
        self._questions = None
        self._lock = threading.Lock()

    @property
    def questions(self):
        """Parsed questions, loaded on first use"""
        with self._lock:
            if self._questions is None:
                self._questions = load_guide(self.guide_path)
            return self._questions

    def reload(self):
        """Re-read the guide from disk"""
        questions = load_guide(self.guide_path)
        with self._lock:
            self._questions = questions
        logger.info(f"Knowledge base reloaded: {len(questions)} questions")
        return len(questions)

    def list_questions(self, section=None):
        questions = self.questions
        if section:
            wanted = section.lower()
            questions = [q for q in questions if (q.section or '').lower() == wanted]
        return list(questions)

    def get_question(self, question_id):
        for question in self.questions:
            if question.id == question_id:
                return question
        raise QuestionNotFoundError(question_id)

    def search(self, term):
        """Questions whose title, answer or scripts contain term"""
        term = (term or '').strip()
        if not term:
            return []
        return [q for q in self.questions if q.matches(term)]

    def sections(self):
        """Section titles in first-seen order"""
        seen = []
        for question in self.questions:
            if question.section and question.section not in seen:
                seen.append(question.section)
        return seen

    def list_scripts(self, language=None):
        scripts = []
        for question in self.questions:
            for index, script in enumerate(question.scripts):
                if language and script.language != language.lower():
                    continue
                entry = script.to_dict()
                entry['question_id'] = question.id
                entry['index'] = index
                scripts.append(entry)
        return scripts

    def validate(self):
        questions = self.questions
        issues = validate_questions(questions)
        if issues:
            logger.warning(f"Guide has {len(issues)} validation issue(s)")
        return {
            'valid': not issues,
            'question_count': len(questions),
            'issues': [issue.to_dict() for issue in issues]
        }
