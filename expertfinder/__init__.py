"""
ExpertFinder - expert search gateway

Authenticates clients with single-use tokens, answers free-text questions
through an LLM and finds matching expert profiles through web search.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- auth: One-time token exchange and session validation
- llm: Answer generation and topic extraction
- search: Expert profile search
- render: Markdown to sanitized HTML
- config: Server configuration and prompts
- api: Request/response models
"""

__version__ = "1.0.0"
