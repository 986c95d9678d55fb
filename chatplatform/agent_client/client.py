# chatplatform/agent_client/client.py
"""
Agent Client - Main client để authenticate và access Agent Chat API.
"""

from typing import Dict, Any, Optional
import logging

import requests

from chatplatform.system_settings import AGENT_API, AgentAPIConfig

from .filters import ArchivesFilters, ChatsFilters, CustomersFilters, ThreadsFilters
from .repositories import AgentRepository

logger = logging.getLogger(__name__)


class AgentClient:
    """
    Main client cho Agent API.

    Usage:
        client = AgentClient()

        archives = client.list_archives(
            ArchivesFilters().by_groups([0]).from_date("2020-01-01"),
            limit=25,
        )

        # Hoặc gọi thẳng repository
        chats = client.agent.list_chats(ChatsFilters().without_active_chats())
    """

    def __init__(self, config: Optional[AgentAPIConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or AGENT_API
        self.session = session or requests.Session()

        headers = {
            "accept": "application/json",
            "content-type": "application/json",
        }
        if self.config.ACCESS_TOKEN:
            headers["authorization"] = f"{self.config.AUTH_SCHEME} {self.config.ACCESS_TOKEN}"
        else:
            logger.warning("[AgentClient] No access token configured (AGENT_API_TOKEN)")
        if self.config.REGION:
            headers["x-region"] = self.config.REGION
        self.session.headers.update(headers)

        # Repository (lazy init)
        self._agent_repo: Optional[AgentRepository] = None

        logger.debug(f"[AgentClient] Initialized for {self.config.base_url}")

    @property
    def agent(self) -> AgentRepository:
        """Repository cho Agent API."""
        if self._agent_repo is None:
            self._agent_repo = AgentRepository(
                self.session,
                self.config.base_url,
                retry=self.config.RETRY,
                timeout=self.config.TIMEOUT,
            )
        return self._agent_repo

    # ========================= SHORTCUTS =========================

    def list_archives(self, filters: Optional[ArchivesFilters] = None, **pagination) -> Dict[str, Any]:
        return self.agent.list_archives(filters, **pagination)

    def list_customers(self, filters: Optional[CustomersFilters] = None, **pagination) -> Dict[str, Any]:
        return self.agent.list_customers(filters, **pagination)

    def list_chats(self, filters: Optional[ChatsFilters] = None, **pagination) -> Dict[str, Any]:
        return self.agent.list_chats(filters, **pagination)

    def list_threads(self, chat_id: str, filters: Optional[ThreadsFilters] = None, **pagination) -> Dict[str, Any]:
        return self.agent.list_threads(chat_id, filters, **pagination)
