"""
Core services for handbook components
"""
from .errors import HandbookError, GuideNotFoundError, QuestionNotFoundError
from .logs import LogBufferHandler, configure_logging, get_buffer

__all__ = [
    'HandbookError',
    'GuideNotFoundError',
    'QuestionNotFoundError',
    'LogBufferHandler',
    'configure_logging',
    'get_buffer'
]
