# chatplatform/agent_client/repositories/agent_repository.py
"""
Repository cho Agent Chat API (https://api.livechatinc.com/v3.5/agent).
Handles list_archives, list_customers, list_chats, list_threads.
"""

from typing import Dict, Any, Optional
import logging

import requests

from chatplatform.base.repository import BaseRepository
from ..exceptions import AgentAPIError
from ..filters import ArchivesFilters, ChatsFilters, CustomersFilters, FilterDTO, ThreadsFilters

logger = logging.getLogger(__name__)


class AgentRepository(BaseRepository):
    """
    Repository cho Agent API.
    Base URL: https://api.livechatinc.com/v{version}/agent

    Mọi action đều là POST /action/<name> với JSON body.

    Endpoints:
    - /action/list_archives - List archived chats
    - /action/list_customers - List customers
    - /action/list_chats - List chat summaries
    - /action/list_threads - List threads of 1 chat
    """

    def _raise_for_status(self, response: requests.Response) -> None:
        """Map response lỗi của Agent API sang AgentAPIError."""
        if response.status_code < 400:
            return

        error_type, message = None, None
        try:
            error = response.json().get("error") or {}
            error_type = error.get("type")
            message = error.get("message")
        except (ValueError, AttributeError):
            message = response.text[:200]

        logger.error(f"[AgentRepo] {response.status_code} {error_type}: {message}")
        raise AgentAPIError(response.status_code, error_type, message)

    @staticmethod
    def _build_payload(filters: Optional[FilterDTO], **pagination) -> Dict[str, Any]:
        """
        Build request body: {"filters": {...}} + các key phân trang đã truyền.
        Filters rỗng và param None không được gửi.
        """
        payload: Dict[str, Any] = {}
        if filters is not None:
            filters_dict = filters.to_dict()
            if filters_dict:
                payload["filters"] = filters_dict
        for key, value in pagination.items():
            if value is not None:
                payload[key] = value
        return payload

    def _action(self, name: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug(f"[AgentRepo] {name} payload: {payload}")
        return self.post(f"action/{name}", json=payload)

    # ==================== ARCHIVES ====================

    def list_archives(
        self,
        filters: Optional[ArchivesFilters] = None,
        page_id: Optional[str] = None,
        limit: Optional[int] = None,
        sort_order: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Lấy danh sách archived chats.

        Args:
            filters: ArchivesFilters
            page_id: Cursor trang tiếp theo (từ next_page_id)
            limit: Số chats mỗi trang
            sort_order: "asc" | "desc"

        Returns:
            {
                "chats": [...],
                "found_chats": int,
                "next_page_id": str,
                "previous_page_id": str
            }
        """
        payload = self._build_payload(filters, page_id=page_id, limit=limit, sort_order=sort_order)
        return self._action("list_archives", payload)

    # ==================== CUSTOMERS ====================

    def list_customers(
        self,
        filters: Optional[CustomersFilters] = None,
        page_id: Optional[str] = None,
        limit: Optional[int] = None,
        sort_order: Optional[str] = None,
        sort_by: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Lấy danh sách customers.

        Args:
            filters: CustomersFilters
            sort_by: "created_at" | "threads_count" | "visits_count" | ...

        Returns:
            {
                "customers": [...],
                "total_customers": int,
                "next_page_id": str
            }
        """
        payload = self._build_payload(
            filters, page_id=page_id, limit=limit, sort_order=sort_order, sort_by=sort_by
        )
        return self._action("list_customers", payload)

    # ==================== CHATS ====================

    def list_chats(
        self,
        filters: Optional[ChatsFilters] = None,
        page_id: Optional[str] = None,
        limit: Optional[int] = None,
        sort_order: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Lấy danh sách chat summaries.

        Returns:
            {
                "chats_summary": [...],
                "found_chats": int,
                "next_page_id": str
            }
        """
        payload = self._build_payload(filters, page_id=page_id, limit=limit, sort_order=sort_order)
        return self._action("list_chats", payload)

    def list_threads(
        self,
        chat_id: str,
        filters: Optional[ThreadsFilters] = None,
        page_id: Optional[str] = None,
        limit: Optional[int] = None,
        sort_order: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Lấy danh sách threads của 1 chat.

        Returns:
            {
                "threads": [...],
                "found_threads": int,
                "next_page_id": str
            }
        """
        payload = {"chat_id": chat_id}
        payload.update(
            self._build_payload(filters, page_id=page_id, limit=limit, sort_order=sort_order)
        )
        return self._action("list_threads", payload)
