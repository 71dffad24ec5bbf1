"""
Knowledge Base Component
The study guide parsed into questions, scripts and sections
"""

from .models import Question, Script, ValidationIssue
from .parser import load_guide, parse_guide
from .routes import knowledge_base_bp, init_knowledge_base
from .service import KnowledgeBaseService
from .validation import validate_questions

__all__ = [
    'Question',
    'Script',
    'ValidationIssue',
    'load_guide',
    'parse_guide',
    'validate_questions',
    'knowledge_base_bp',
    'init_knowledge_base',
    'KnowledgeBaseService'
]
