"""
Agent System
============

The agent is the orchestration core. It:
1. Merges session memory into the system prompt
2. Asks the model for an answer
3. Executes any requested tools and feeds results back
4. Streams the final answer when asked to
5. Writes the finished turn back to memory

This module provides:
- run_agent / Agent: the agent loop and a chat-style wrapper
- Context assembly functions for prompts
- ToolExecutor: the per-call recovery boundary
"""

from ai_core.agent.core import (
    Agent,
    AgentError,
    AgentResult,
    MaxIterationsError,
    run_agent,
)
from ai_core.agent.context import (
    assemble_context,
    build_rag_system_prompt,
    build_system_prompt,
)
from ai_core.agent.tools_executor import ToolExecutor

__all__ = [
    "Agent",
    "AgentError",
    "AgentResult",
    "MaxIterationsError",
    "ToolExecutor",
    "assemble_context",
    "build_rag_system_prompt",
    "build_system_prompt",
    "run_agent",
]
