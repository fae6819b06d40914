"""
Render Module - Black Box Interface

Purpose: Turn LLM markdown into HTML that is safe to inject into a page
Interface: render_answer()
Hidden: Markdown parser configuration, escaping rules
"""

from .markdown import render_answer

__all__ = ["render_answer"]
