"""MindWell: mood and journal tracking service with AI insights."""

__version__ = "1.0.0"
