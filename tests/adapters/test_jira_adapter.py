"""Tests for the Jira adapter."""

import pytest
from unittest.mock import patch

from md2adf.adapters.jira import JiraAdapter
from md2adf.core.domain import CommitRef
from md2adf.core.exceptions import IssueTrackerError, TransitionError
from md2adf.core.ports import TrackerConfig


@pytest.fixture
def config():
    return TrackerConfig(url="https://example.atlassian.net", email="a@b.c", api_token="t")


@pytest.fixture
def client():
    with patch("md2adf.adapters.jira.adapter.JiraApiClient") as client_cls:
        yield client_cls.return_value


@pytest.fixture
def adapter(config, client):
    return JiraAdapter(config, dry_run=False)


class TestReads:
    
    def test_get_issue(self, adapter, client):
        client.get_issue.return_value = {
            "id": "10001",
            "key": "PROJ-1",
            "fields": {
                "summary": "Login fails",
                "status": {"name": "In Progress"},
                "assignee": None,
                "issuetype": {"name": "Bug"},
                "priority": {"name": "High"},
                "description": {
                    "type": "doc",
                    "version": 1,
                    "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Steps"}]}],
                },
            },
        }
        
        issue = adapter.get_issue("PROJ-1")
        
        assert issue.key == "PROJ-1"
        assert issue.id == 10001
        assert issue.status == "In Progress"
        assert issue.assignee is None
        assert issue.issue_type == "Bug"
        assert issue.description == "Steps"
    
    def test_get_transitions(self, adapter, client):
        client.get_transitions.return_value = [{"id": "1", "name": "Done", "to": {"name": "Done"}}]
        assert adapter.get_transitions("PROJ-1") == [{"id": "1", "name": "Done"}]
    
    def test_search_issues(self, adapter, client):
        client.search.return_value = {"issues": [
            {"id": "2", "key": "PROJ-2", "fields": {"summary": "x", "assignee": {"displayName": "Ada"}}},
        ]}
        
        issues = adapter.search_issues("project = PROJ", max_results=5)
        
        assert [(i.key, i.assignee) for i in issues] == [("PROJ-2", "Ada")]
        assert "description" not in client.search.call_args[0][1]
        assert client.search.call_args.kwargs["max_results"] == 5
    
    def test_get_current_user(self, adapter, client):
        client.get_myself.return_value = {"accountId": "acc-1"}
        assert adapter.get_current_user() == {"accountId": "acc-1"}


class TestWrites:
    
    def test_add_comment_converts_markdown(self, adapter, client):
        assert adapter.add_comment("PROJ-1", "*hi*")
        
        issue_key, body = client.add_comment.call_args[0]
        assert issue_key == "PROJ-1"
        assert body["type"] == "doc"
        assert body["content"][0]["content"][0]["marks"] == [{"type": "em"}]
    
    def test_add_comment_passes_adf_through(self, adapter, client):
        document = {"type": "doc", "version": 1, "content": []}
        adapter.add_comment("PROJ-1", document)
        client.add_comment.assert_called_once_with("PROJ-1", document)
    
    def test_update_description(self, adapter, client):
        adapter.update_issue_description("PROJ-1", "# New")
        
        issue_key, fields = client.update_fields.call_args[0]
        assert issue_key == "PROJ-1"
        assert fields["description"]["content"][0]["type"] == "heading"
    
    def test_transition_error_is_wrapped(self, adapter, client):
        client.do_transition.side_effect = IssueTrackerError("Jira API error 400 on x: bad")
        with pytest.raises(TransitionError):
            adapter.transition_issue("PROJ-1", "31")
    
    def test_assign_issue(self, adapter, client):
        adapter.assign_issue("PROJ-1", "acc-1")
        client.set_assignee.assert_called_once_with("PROJ-1", "acc-1")
    
    def test_add_commits_comment(self, adapter, client):
        adapter.add_commits_comment("PROJ-1", [CommitRef(hash="abcdef12345", message="Fix")])
        body = client.add_comment.call_args[0][1]
        assert body["content"][1]["type"] == "table"


class TestCreateIssue:
    
    def test_minimal(self, adapter, client):
        client.create_issue.return_value = {"id": "10010", "key": "PROJ-10"}
        client.browse_url.return_value = "https://example.atlassian.net/browse/PROJ-10"
        
        created = adapter.create_issue("PROJ", "New thing", "Task")
        
        assert created == {
            "id": 10010,
            "key": "PROJ-10",
            "url": "https://example.atlassian.net/browse/PROJ-10",
        }
        client.create_issue.assert_called_once_with({
            "project": {"key": "PROJ"},
            "summary": "New thing",
            "issuetype": {"name": "Task"},
        })
    
    def test_markdown_description_and_options(self, adapter, client):
        client.create_issue.return_value = {"id": "1", "key": "PROJ-1"}
        
        adapter.create_issue(
            "PROJ", "Bug", "Bug",
            description="**Steps**\n\n1. open",
            priority="High",
            assignee_account_id="acc-1",
        )
        
        fields = client.create_issue.call_args[0][0]
        assert fields["priority"] == {"name": "High"}
        assert fields["assignee"] == {"accountId": "acc-1"}
        assert [b["type"] for b in fields["description"]["content"]] == ["paragraph", "orderedList"]
    
    def test_dry_run(self, config, client):
        created = JiraAdapter(config, dry_run=True).create_issue("PROJ", "x", "Task")
        
        assert created["key"] is None
        client.create_issue.assert_not_called()


class TestDryRun:
    
    def test_writes_are_skipped(self, config, client):
        adapter = JiraAdapter(config, dry_run=True)
        
        assert adapter.add_comment("PROJ-1", "x")
        assert adapter.update_issue_description("PROJ-1", "x")
        assert adapter.transition_issue("PROJ-1", "31")
        assert adapter.assign_issue("PROJ-1", "acc")
        
        client.add_comment.assert_not_called()
        client.update_fields.assert_not_called()
        client.do_transition.assert_not_called()
        client.set_assignee.assert_not_called()
