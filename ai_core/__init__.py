"""
ai-core - Conversational Agent Runtime
======================================

Drives a language model through a bounded tool-use loop and produces a
final answer, optionally streaming it.

This package provides:
- Agent loop (run_agent / Agent) with per-call tool error containment
- Model capability contract and an OpenAI-compatible backend
- Tool registry with pydantic-validated tool inputs
- Per-session memory stores (in-memory and file-backed)
- Context assembly for system prompts, with optional RAG grounding
"""

__version__ = "1.0.0"
