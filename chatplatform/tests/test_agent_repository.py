# chatplatform/tests/test_agent_repository.py
"""
Tests for AgentRepository request bodies, error mapping và retry.
"""

import unittest
from unittest.mock import MagicMock, patch

import requests

from chatplatform.agent_client.exceptions import AgentAPIError
from chatplatform.agent_client.filters import (
    ArchivesFilters,
    ChatsFilters,
    CustomersFilters,
    RangeFilter,
    ThreadsFilters,
)
from chatplatform.agent_client.repositories import AgentRepository

BASE_URL = "https://api.example.com/v3.5/agent"


def make_response(status_code=200, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body if body is not None else {}
    response.text = ""
    return response


class AgentRepositoryTestCase(unittest.TestCase):

    def setUp(self):
        self.session = MagicMock()
        self.session.request.return_value = make_response(body={"chats": []})
        self.repo = AgentRepository(self.session, BASE_URL + "/")

    def sent_json(self):
        return self.session.request.call_args.kwargs["json"]


class TestRequestBodies(AgentRepositoryTestCase):
    """Test payload gửi lên cho từng action"""

    def test_list_archives(self):
        result = self.repo.list_archives(
            ArchivesFilters().by_groups([1, 2]).from_date("2020-01-01"),
            limit=10,
        )

        self.assertEqual(result, {"chats": []})
        kwargs = self.session.request.call_args.kwargs
        self.assertEqual(kwargs["method"], "POST")
        self.assertEqual(kwargs["url"], f"{BASE_URL}/action/list_archives")
        self.assertEqual(kwargs["timeout"], 30)
        self.assertEqual(self.sent_json(), {
            "filters": {"group_ids": [1, 2], "from": "2020-01-01"},
            "limit": 10,
        })

    def test_empty_filters_are_omitted(self):
        self.repo.list_chats(ChatsFilters())

        self.assertEqual(self.sent_json(), {})

    def test_list_chats_without_active(self):
        self.repo.list_chats(ChatsFilters().without_active_chats(), page_id="abc")

        self.assertEqual(self.sent_json(), {
            "filters": {"include_active": False},
            "page_id": "abc",
        })

    def test_list_customers(self):
        self.repo.list_customers(
            CustomersFilters().by_chats_count(RangeFilter(gte=1)),
            sort_order="asc",
            sort_by="created_at",
        )

        self.assertEqual(self.sent_json(), {
            "filters": {"chats_count": {"gte": 1}},
            "sort_order": "asc",
            "sort_by": "created_at",
        })

    def test_list_threads(self):
        self.repo.list_threads("CHAT1", ThreadsFilters().to_date("2020-01-01"))

        self.assertEqual(
            self.session.request.call_args.kwargs["url"],
            f"{BASE_URL}/action/list_threads"
        )
        self.assertEqual(self.sent_json(), {
            "chat_id": "CHAT1",
            "filters": {"to": "2020-01-01"},
        })


class TestErrorHandling(AgentRepositoryTestCase):
    """Test map lỗi sang AgentAPIError"""

    def test_error_envelope(self):
        self.session.request.return_value = make_response(
            400, {"error": {"type": "validation", "message": "Wrong format of request"}}
        )

        with self.assertRaises(AgentAPIError) as ctx:
            self.repo.list_archives(ArchivesFilters())

        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.error_type, "validation")
        self.assertEqual(ctx.exception.message, "Wrong format of request")
        self.assertEqual(str(ctx.exception), "400 validation: Wrong format of request")

    def test_non_json_error(self):
        response = make_response(502)
        response.json.side_effect = ValueError("no json")
        response.text = "Bad Gateway"
        self.session.request.return_value = response

        with self.assertRaises(AgentAPIError) as ctx:
            self.repo.list_chats()

        self.assertEqual(ctx.exception.status_code, 502)
        self.assertIsNone(ctx.exception.error_type)
        self.assertEqual(ctx.exception.message, "Bad Gateway")

    def test_non_json_success_returns_empty_dict(self):
        response = make_response(200)
        response.json.side_effect = ValueError("no json")
        self.session.request.return_value = response

        self.assertEqual(self.repo.list_chats(), {})


class TestRetry(AgentRepositoryTestCase):
    """Test retry logic kế thừa từ BaseRepository"""

    @patch("chatplatform.base.repository.time.sleep")
    def test_connection_error_is_retried(self, sleep):
        self.session.request.side_effect = [
            requests.ConnectionError("reset"),
            make_response(body={"found_chats": 0}),
        ]

        result = self.repo.list_archives()

        self.assertEqual(result, {"found_chats": 0})
        self.assertEqual(self.session.request.call_count, 2)
        sleep.assert_called_once_with(1.0)

    @patch("chatplatform.base.repository.time.sleep")
    def test_connection_error_raised_after_retries(self, sleep):
        self.session.request.side_effect = requests.ConnectionError("down")

        with self.assertRaises(requests.ConnectionError):
            self.repo.list_archives()

        self.assertEqual(self.session.request.call_count, 3)

    def test_zero_retry_still_sends_once(self):
        """retry <= 0 vẫn gửi request đúng 1 lần"""
        repo = AgentRepository(self.session, BASE_URL, retry=0)

        result = repo.list_chats(ChatsFilters())

        self.assertEqual(result, {"chats": []})
        self.assertEqual(self.session.request.call_count, 1)

    @patch("chatplatform.base.repository.time.sleep")
    def test_zero_retry_connection_error_not_retried(self, sleep):
        self.session.request.side_effect = requests.ConnectionError("down")
        repo = AgentRepository(self.session, BASE_URL, retry=0)

        with self.assertRaises(requests.ConnectionError):
            repo.list_chats()

        self.assertEqual(self.session.request.call_count, 1)
        sleep.assert_not_called()

    @patch("chatplatform.base.repository.time.sleep")
    def test_timeout_retried_once(self, sleep):
        self.session.request.side_effect = requests.Timeout("slow")

        with self.assertRaises(requests.Timeout):
            self.repo.list_chats()

        self.assertEqual(self.session.request.call_count, 2)


if __name__ == '__main__':
    unittest.main()
