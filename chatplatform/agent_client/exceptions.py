# chatplatform/agent_client/exceptions.py
"""
Custom exceptions for Agent Client.
"""

from typing import Optional


class AgentAPIError(Exception):
    """
    Raised when Agent API trả về response lỗi (status >= 400).

    Agent API bọc lỗi trong envelope:
        {"error": {"type": "validation", "message": "..."}}
    """

    def __init__(self, status_code: int, error_type: Optional[str] = None, message: Optional[str] = None):
        self.status_code = status_code
        self.error_type = error_type
        self.message = message
        text = f"{status_code} {error_type or 'unknown'}"
        if message:
            text = f"{text}: {message}"
        super().__init__(text)
