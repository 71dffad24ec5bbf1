"""
Tests for the study guide parser and document checks.
"""

from __future__ import annotations

import pytest

from conftest import SAMPLE_GUIDE
from devops_handbook.components.knowledge_base import load_guide, parse_guide, validate_questions
from devops_handbook.components.knowledge_base.parser import slugify, split_numbered_title
from devops_handbook.config.settings import HandbookConfig
from devops_handbook.core.errors import GuideNotFoundError


def test_parse_sample_guide_questions_in_order():
    questions = parse_guide(SAMPLE_GUIDE)
    assert [q.id for q in questions] == ['q1', 'q2', 'why-use-containers', 'q3']
    assert [q.number for q in questions] == [1, 2, None, 3]
    assert questions[0].title == 'What is CI?'
    assert questions[1].title == 'Show a restart command'


def test_answer_text_and_sections():
    questions = parse_guide(SAMPLE_GUIDE)
    first = questions[0]
    assert first.section == 'Basics'
    assert first.answer == '- Merge often.\n- Build and test every change.'
    assert questions[2].section == 'Extras'
    # Deeper headings stay inside the answer
    assert '#### Details' in questions[2].answer
    assert questions[2].answer.endswith('Namespaces and cgroups.')


def test_code_blocks_become_scripts():
    question = parse_guide(SAMPLE_GUIDE)[1]
    assert question.answer == ''
    assert len(question.scripts) == 1
    assert question.scripts[0].language == 'bash'
    assert question.scripts[0].source == 'systemctl restart nginx'
    assert question.has_answer is True


def test_section_comes_from_level_one_or_two_headings():
    text = (
        "## Basics\n"
        "### 1. What is CI?\nA\n"
        "### Notes\ntext\n"
        "### 2. What is CD?\nB\n"
        "# Part Two\n"
        "### 3. What is a runbook?\nC\n"
    )
    questions = parse_guide(text)
    assert [q.section for q in questions] == ['Basics', 'Basics', 'Part Two']
    # A deeper non-question heading still ends the previous answer
    assert questions[0].answer == 'A'


def test_heading_keeps_trailing_hash_in_words():
    questions = parse_guide("## Intro to C#\n### 1. Why F#? ###\nFunctional.\n")
    assert questions[0].section == 'Intro to C#'
    assert questions[0].title == 'Why F#?'


def test_headings_inside_fences_are_not_questions():
    text = (
        "## 1. Show a script?\n"
        "~~~python\n"
        "## 2. not a heading?\n"
        "print('hi')\n"
        "~~~\n"
    )
    questions = parse_guide(text)
    assert len(questions) == 1
    assert questions[0].scripts[0].source == "## 2. not a heading?\nprint('hi')"


def test_unterminated_fence_runs_to_end():
    questions = parse_guide("### 1. Open fence\n```Dockerfile\nFROM alpine\n")
    assert questions[0].scripts[0].language == 'dockerfile'
    assert questions[0].scripts[0].source == 'FROM alpine'


def test_duplicate_ids_get_suffixes():
    text = "## Same title?\nA\n## Same title?\nB\n## Same title?\nC\n"
    assert [q.id for q in parse_guide(text)] == ['same-title', 'same-title-2', 'same-title-3']


def test_plain_headings_are_not_questions():
    questions = parse_guide("## Overview\nSome text\n### Notes\nMore text\n")
    assert questions == []


@pytest.mark.parametrize('title, expected', [
    ('1. What is DevOps?', (1, 'What is DevOps?')),
    ('Q12: Explain SLOs', (12, 'Explain SLOs')),
    ('Question 4 - Rolling updates', (4, 'Rolling updates')),
    ('What is a Pod?', (None, 'What is a Pod?')),
])
def test_split_numbered_title(title, expected):
    assert split_numbered_title(title) == expected


def test_slugify():
    assert slugify('What is CI/CD?') == 'what-is-ci-cd'
    assert slugify('???') == 'question'


def test_validate_reports_empty_answer():
    issues = validate_questions(parse_guide(SAMPLE_GUIDE))
    assert [(i.question_id, i.code) for i in issues] == [('q3', 'empty_answer')]


def test_validate_script_and_number_issues():
    text = (
        "### 1. First\n```\nls\n```\n"
        "### 1. Again\n```yaml\n```\n"
    )
    codes = [(i.question_id, i.code) for i in validate_questions(parse_guide(text))]
    assert ('q1', 'untagged_script') in codes
    assert ('q1-2', 'empty_script') in codes
    assert ('q1-2', 'empty_answer') in codes
    assert ('q1-2', 'duplicate_number') in codes


def test_validate_reports_empty_title():
    codes = [(i.question_id, i.code) for i in validate_questions(parse_guide("## Q1:\nbody\n"))]
    assert codes == [('q1', 'empty_title')]


def test_bundled_guide_is_valid():
    questions = load_guide(HandbookConfig.GUIDE_PATH)
    assert len(questions) >= 20
    assert validate_questions(questions) == []
    languages = {s.language for q in questions for s in q.scripts}
    assert {'python', 'dockerfile'} <= languages


def test_load_guide_missing_file(tmp_path):
    with pytest.raises(GuideNotFoundError, match='Guide not found'):
        load_guide(tmp_path / 'nope.md')
