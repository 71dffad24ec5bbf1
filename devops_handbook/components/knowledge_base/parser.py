"""
Study guide parser
Turns the markdown guide into Question entries
"""
import logging
import re
from pathlib import Path
from typing import List, Optional

from ...core.errors import GuideNotFoundError
from .models import Question, Script

logger = logging.getLogger(__name__)

HEADING_RE = re.compile(r'^(#{1,6})\s+(.*?)(?:\s+#+)?\s*$')
FENCE_OPEN_RE = re.compile(r'^\s{0,3}(`{3,}|~{3,})\s*([^\s`]*)')
NUMBERED_RE = re.compile(
    r'^(?:(?:Question|Q)\s*(\d+)\s*[:.)\-]\s*|(\d+)[.)]\s+)(.*)$',
    re.IGNORECASE
)
SLUG_RE = re.compile(r'[^a-z0-9]+')

QUESTION_LEVELS = (2, 3)


def split_numbered_title(title: str):
    """Return (number, title) for 'Q3: ...' / '3. ...' style titles, else (None, title)"""
    match = NUMBERED_RE.match(title)
    if not match:
        return None, title
    number = match.group(1) or match.group(2)
    return int(number), match.group(3).strip()


def is_question_heading(level: int, title: str) -> bool:
    if level not in QUESTION_LEVELS:
        return False
    number, _ = split_numbered_title(title)
    return number is not None or title.rstrip().endswith('?')


def slugify(text: str, max_length: int = 60) -> str:
    slug = SLUG_RE.sub('-', text.lower()).strip('-')
    return slug[:max_length].rstrip('-') or 'question'


class _Draft:
    """Question being collected while scanning lines"""

    def __init__(self, level, number, title, section):
        self.level = level
        self.number = number
        self.title = title
        self.section = section
        self.answer_lines = []
        self.scripts = []


class _Fence:
    def __init__(self, marker, language):
        self.char = marker[0]
        self.length = len(marker)
        self.language = language.lower()
        self.lines = []

    def closes(self, line):
        stripped = line.strip()
        return (len(stripped) >= self.length
                and set(stripped) == {self.char})


def parse_guide(text: str) -> List[Question]:
    """Parse markdown study guide text into questions, in document order"""
    drafts = []
    current: Optional[_Draft] = None
    section = None
    fence: Optional[_Fence] = None

    for line in text.splitlines():
        if fence is not None:
            if fence.closes(line):
                if current is not None:
                    current.scripts.append(Script(fence.language, '\n'.join(fence.lines)))
                fence = None
            else:
                fence.lines.append(line)
            continue

        fence_match = FENCE_OPEN_RE.match(line)
        if fence_match:
            fence = _Fence(fence_match.group(1), fence_match.group(2))
            continue

        heading = HEADING_RE.match(line)
        if heading:
            level = len(heading.group(1))
            title = heading.group(2).strip()

            if is_question_heading(level, title):
                number, clean_title = split_numbered_title(title)
                current = _Draft(level, number, clean_title, section)
                drafts.append(current)
                continue

            if current is not None and level > current.level:
                # Sub-heading inside an answer
                current.answer_lines.append(line)
                continue

            current = None
            if level <= 2:
                section = title
            continue

        if current is not None:
            current.answer_lines.append(line)

    # Unterminated fence runs to the end of the document
    if fence is not None and current is not None:
        current.scripts.append(Script(fence.language, '\n'.join(fence.lines)))

    return _assign_ids(drafts)


def _assign_ids(drafts) -> List[Question]:
    questions = []
    seen = set()
    for draft in drafts:
        base = f'q{draft.number}' if draft.number is not None else slugify(draft.title)
        question_id = base
        suffix = 2
        while question_id in seen:
            question_id = f'{base}-{suffix}'
            suffix += 1
        seen.add(question_id)

        questions.append(Question(
            id=question_id,
            title=draft.title,
            answer='\n'.join(draft.answer_lines).strip(),
            scripts=draft.scripts,
            number=draft.number,
            section=draft.section
        ))
    return questions


def load_guide(path) -> List[Question]:
    """Read and parse a guide file"""
    guide_path = Path(path)
    if not guide_path.is_file():
        raise GuideNotFoundError(guide_path)

    text = guide_path.read_text(encoding='utf-8')
    questions = parse_guide(text)
    logger.info(f"Loaded {len(questions)} questions from {guide_path}")
    return questions
