"""StudyOlle account settings service"""

__version__ = "0.1.0"
