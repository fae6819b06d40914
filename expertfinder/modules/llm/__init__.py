"""
LLM Module - Black Box Interface

Purpose: Free-text answers and topic extraction
Interface: OpenAIClient.get_answer(), OpenAIClient.extract_topic()
Hidden: Prompt wording, request payloads, response parsing
"""

from .openai_client import OpenAIClient

__all__ = ["OpenAIClient"]
