"""
DevOps interview handbook: the study guide as a browsable knowledge base,
plus the metrics poller and threshold restarter it describes.
"""

__version__ = '0.1.0'
