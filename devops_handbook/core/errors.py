"""
Exceptions shared by handbook components
"""


class HandbookError(Exception):
    """Base class for handbook errors"""


class GuideNotFoundError(HandbookError):
    """The study guide file does not exist"""

    def __init__(self, path):
        super().__init__(f"Guide not found: {path}")
        self.path = path


class QuestionNotFoundError(HandbookError):
    """No question with the requested id"""

    def __init__(self, question_id):
        super().__init__(f"Unknown question: {question_id}")
        self.question_id = question_id
