"""
Agent Client package.
Provides filter builders and AgentClient for the Agent Chat API.
"""

from typing import Optional
from .client import AgentClient
from .exceptions import AgentAPIError
from .filters import (
    ArchivesFilters,
    ChatsFilters,
    CustomersFilters,
    DateRangeFilter,
    EventTypesFilter,
    IntegerFilter,
    PropertiesFilters,
    PropertyFilterType,
    RangeFilter,
    StringFilter,
    SurveyFilter,
    ThreadsFilters,
    integer_filter,
    property_filter,
    string_filter,
)
from .repositories import AgentRepository

# Singleton instance
_agent_client: Optional[AgentClient] = None


def get_agent_client() -> AgentClient:
    """
    Get singleton AgentClient instance (dùng chung toàn process).
    """
    global _agent_client
    if _agent_client is None:
        _agent_client = AgentClient()
    return _agent_client


__all__ = [
    "AgentClient",
    "AgentAPIError",
    "AgentRepository",
    "ArchivesFilters",
    "ChatsFilters",
    "CustomersFilters",
    "DateRangeFilter",
    "EventTypesFilter",
    "IntegerFilter",
    "PropertiesFilters",
    "PropertyFilterType",
    "RangeFilter",
    "StringFilter",
    "SurveyFilter",
    "ThreadsFilters",
    "get_agent_client",
    "integer_filter",
    "property_filter",
    "string_filter",
]
