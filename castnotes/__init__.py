"""Podcast transcription and content-summary service."""

__version__ = "0.1.0"
