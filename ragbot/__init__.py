"""
RAG Ask Service

A small Retrieval-Augmented Generation backend that answers
questions from a fixed text corpus using hosted Gemini models.
"""

__version__ = "1.0.0"
