# chatplatform/tests/test_client.py
"""
Tests for AgentClient wiring và system_settings.
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import requests

from chatplatform.agent_client import AgentClient, ChatsFilters, get_agent_client
from chatplatform.system_settings import AgentAPIConfig, load_config_file


def make_config(**overrides):
    values = dict(
        API_URL="https://api.example.com/",
        API_VERSION="3.5",
        ACCESS_TOKEN="token-123",
        AUTH_SCHEME="Bearer",
        REGION=None,
        TIMEOUT=15,
        RETRY=2,
    )
    values.update(overrides)
    return AgentAPIConfig(**values)


class TestAgentClient(unittest.TestCase):
    """Test AgentClient setup"""

    def test_headers(self):
        client = AgentClient(make_config(REGION="fra"), session=requests.Session())

        self.assertEqual(client.session.headers["Authorization"], "Bearer token-123")
        self.assertEqual(client.session.headers["X-Region"], "fra")
        self.assertEqual(client.session.headers["Content-Type"], "application/json")

    def test_no_token_no_auth_header(self):
        client = AgentClient(make_config(ACCESS_TOKEN=""), session=requests.Session())

        self.assertNotIn("Authorization", client.session.headers)

    def test_repository_uses_config(self):
        client = AgentClient(make_config(), session=requests.Session())

        repo = client.agent
        self.assertIs(client.agent, repo)
        self.assertEqual(repo.base_url, "https://api.example.com/v3.5/agent")
        self.assertEqual(repo.timeout, 15)
        self.assertEqual(repo.retry, 2)

    def test_get_agent_client_is_singleton(self):
        self.assertIs(get_agent_client(), get_agent_client())

    def test_list_chats_shortcut(self):
        session = MagicMock()
        session.headers = {}
        response = MagicMock(status_code=200)
        response.json.return_value = {"chats_summary": []}
        session.request.return_value = response
        client = AgentClient(make_config(), session=session)

        result = client.list_chats(ChatsFilters().by_groups([1]), limit=5)

        self.assertEqual(result, {"chats_summary": []})
        self.assertEqual(
            session.request.call_args.kwargs["json"],
            {"filters": {"group_ids": [1]}, "limit": 5}
        )


class TestSystemSettings(unittest.TestCase):
    """Test config file parsing"""

    def test_load_config_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "agent_api.env"
            path.write_text(
                "# comment\n\nAGENT_API_TOKEN = abc=def\nbroken line\nAGENT_API_REGION=dal\n",
                encoding="utf-8",
            )

            config = load_config_file(path)

        self.assertEqual(config, {"AGENT_API_TOKEN": "abc=def", "AGENT_API_REGION": "dal"})

    def test_missing_config_file(self):
        self.assertEqual(load_config_file(Path(os.devnull) / "missing.env"), {})


if __name__ == '__main__':
    unittest.main()
