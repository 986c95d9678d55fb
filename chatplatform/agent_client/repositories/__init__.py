"""
Agent API Repositories.
"""

from .agent_repository import AgentRepository

__all__ = ['AgentRepository']
