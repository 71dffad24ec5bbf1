"""
Configuration for the handbook service
"""
from .settings import HandbookConfig

__all__ = ['HandbookConfig']
