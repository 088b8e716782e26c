"""Tests for the low-level Jira REST client."""

import pytest
import requests
from unittest.mock import Mock, patch

from md2adf.adapters.jira import JiraApiClient
from md2adf.adapters.jira.client import normalize_base_url
from md2adf.core.exceptions import (
    AuthenticationError,
    IssueTrackerError,
    NotFoundError,
    PermissionError,
)


API = "https://example.atlassian.net/rest/api/3"


def make_response(status_code=200, json_data=None, text=None):
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data if json_data is not None else {}
    if text is None:
        text = "" if json_data is None else "{...}"
    response.text = text
    return response


@pytest.fixture
def client():
    return JiraApiClient(
        base_url="example.atlassian.net/",
        email="dev@example.com",
        api_token="token",
        dry_run=False,
    )


@pytest.fixture
def session_request(client):
    with patch.object(client._session, "request") as request:
        request.return_value = make_response(json_data={"ok": True})
        yield request


class TestConstruction:
    
    @pytest.mark.parametrize("raw,expected", [
        ("example.atlassian.net/", "https://example.atlassian.net"),
        ("http://jira.local", "http://jira.local"),
        ("  https://a.b/  ", "https://a.b"),
        ("", ""),
    ])
    def test_normalize_base_url(self, raw, expected):
        assert normalize_base_url(raw) == expected
    
    def test_session_uses_basic_auth(self, client):
        assert client.api_url == API
        assert client._session.auth == ("dev@example.com", "token")
        assert client._session.headers["Content-Type"] == "application/json"
    
    def test_browse_url(self, client):
        assert client.browse_url("PROJ-1") == "https://example.atlassian.net/browse/PROJ-1"


class TestEndpoints:
    
    def test_get_issue(self, client, session_request):
        client.get_issue("PROJ-1", "summary,status")
        
        session_request.assert_called_once_with(
            "GET", f"{API}/issue/PROJ-1", timeout=30, params={"fields": "summary,status"}
        )
    
    def test_get_transitions(self, client, session_request):
        session_request.return_value = make_response(json_data={"transitions": [{"id": "1"}]})
        assert client.get_transitions("PROJ-1") == [{"id": "1"}]
    
    def test_add_comment(self, client, session_request):
        doc = {"version": 1, "type": "doc", "content": []}
        client.add_comment("PROJ-1", doc)
        
        method, url = session_request.call_args[0]
        assert (method, url) == ("POST", f"{API}/issue/PROJ-1/comment")
        assert session_request.call_args.kwargs["json"] == {"body": doc}
    
    def test_update_fields_no_content(self, client, session_request):
        session_request.return_value = make_response(status_code=204)
        
        assert client.update_fields("PROJ-1", {"summary": "x"}) == {}
        assert session_request.call_args.kwargs["json"] == {"fields": {"summary": "x"}}
    
    def test_do_transition(self, client, session_request):
        client.do_transition("PROJ-1", "31")
        assert session_request.call_args.kwargs["json"] == {"transition": {"id": "31"}}
    
    def test_set_assignee(self, client, session_request):
        client.set_assignee("PROJ-1", "acc-1")
        assert session_request.call_args[0] == ("PUT", f"{API}/issue/PROJ-1/assignee")
    
    def test_create_issue(self, client, session_request):
        session_request.return_value = make_response(json_data={"id": "10", "key": "PROJ-10"})
        
        assert client.create_issue({"summary": "x"}) == {"id": "10", "key": "PROJ-10"}
        assert session_request.call_args[0] == ("POST", f"{API}/issue")


class TestErrors:
    
    @pytest.mark.parametrize("status,error", [
        (401, AuthenticationError),
        (403, PermissionError),
        (404, NotFoundError),
        (500, IssueTrackerError),
    ])
    def test_status_mapping(self, client, status, error):
        with patch.object(client._session, "request",
                          return_value=make_response(status_code=status, json_data=ValueError(), text="nope")):
            with pytest.raises(error):
                client.get_issue("PROJ-1", "summary")
    
    def test_jira_error_messages(self, client):
        body = {"errorMessages": ["Issue does not exist"], "errors": {"summary": "required"}}
        with patch.object(client._session, "request",
                          return_value=make_response(status_code=400, json_data=body)):
            with pytest.raises(IssueTrackerError, match="400 on issue: Issue does not exist; summary: required"):
                client.create_issue({})
    
    def test_plain_text_error_body(self, client):
        with patch.object(client._session, "request",
                          return_value=make_response(status_code=502, json_data=ValueError(), text="Bad gateway")):
            with pytest.raises(IssueTrackerError, match="502 on myself: Bad gateway"):
                client.get_myself()
    
    @pytest.mark.parametrize("failure", [
        requests.exceptions.ConnectionError("refused"),
        requests.exceptions.Timeout("slow"),
    ])
    def test_transport_errors_are_wrapped(self, client, failure):
        with patch.object(client._session, "request", side_effect=failure):
            with pytest.raises(IssueTrackerError) as exc_info:
                client.get_myself()
        assert exc_info.value.cause is failure


class TestDryRun:
    
    @pytest.fixture
    def dry_client(self):
        return JiraApiClient("https://example.atlassian.net", "a@b.c", "t", dry_run=True)
    
    def test_writes_are_skipped(self, dry_client):
        with patch.object(dry_client._session, "request") as request:
            assert dry_client.add_comment("PROJ-1", {}) == {}
            assert dry_client.update_fields("PROJ-1", {}) == {}
            assert dry_client.do_transition("PROJ-1", "1") == {}
            assert dry_client.set_assignee("PROJ-1", "acc") == {}
            assert dry_client.create_issue({}) == {}
        request.assert_not_called()
    
    def test_reads_still_run(self, dry_client):
        with patch.object(dry_client._session, "request",
                          return_value=make_response(json_data={"issues": []})) as request:
            assert dry_client.search("project = PROJ", ["summary"]) == {"issues": []}
        assert request.call_args[0][0] == "POST"
        assert request.call_args.kwargs["json"]["maxResults"] == 20


class TestConnection:
    
    def test_myself_is_cached(self, client, session_request):
        session_request.return_value = make_response(json_data={"accountId": "abc"})
        
        assert client.get_myself()["accountId"] == "abc"
        assert client.get_myself()["accountId"] == "abc"
        assert session_request.call_count == 1
        assert client.test_connection()
    
    def test_failed_connection(self, client):
        with patch.object(client._session, "request",
                          return_value=make_response(status_code=401)):
            assert client.test_connection() is False
