"""
Document-level checks for the study guide
"""
from collections import defaultdict
from typing import Iterable, List

from .models import Question, ValidationIssue

EMPTY_ANSWER = 'empty_answer'
EMPTY_TITLE = 'empty_title'
DUPLICATE_NUMBER = 'duplicate_number'
EMPTY_SCRIPT = 'empty_script'
UNTAGGED_SCRIPT = 'untagged_script'


def validate_questions(questions: Iterable[Question]) -> List[ValidationIssue]:
    """Return every issue found, in document order"""
    questions = list(questions)
    issues = []
    by_number = defaultdict(list)

    for question in questions:
        if not question.title.strip():
            issues.append(ValidationIssue(question.id, EMPTY_TITLE, 'Question has no title'))

        if not question.has_answer:
            issues.append(ValidationIssue(
                question.id, EMPTY_ANSWER, f"'{question.title}' has no answer"
            ))

        for index, script in enumerate(question.scripts, start=1):
            if script.is_empty:
                issues.append(ValidationIssue(
                    question.id, EMPTY_SCRIPT, f'Code block {index} is empty'
                ))
            if not script.language:
                issues.append(ValidationIssue(
                    question.id, UNTAGGED_SCRIPT, f'Code block {index} has no language tag'
                ))

        if question.number is not None:
            by_number[question.number].append(question.id)

    for number, ids in by_number.items():
        if len(ids) < 2:
            continue
        for question_id in ids[1:]:
            issues.append(ValidationIssue(
                question_id, DUPLICATE_NUMBER,
                f'Number {number} is also used by {ids[0]}'
            ))

    return issues
