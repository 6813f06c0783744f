"""Editorial Workflow Service - article status workflow engine and API"""

__version__ = "1.0.0"
