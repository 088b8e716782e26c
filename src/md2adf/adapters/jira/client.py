"""
Jira API Client - HTTP calls against Jira Cloud REST API v3.

One method per endpoint md2adf uses. Reads always go out; writes are
routed through `_write`, which only logs them in dry-run mode.
"""

import logging
from typing import Any, Optional

import requests

from ...core.exceptions import (
    IssueTrackerError,
    AuthenticationError,
    NotFoundError,
    PermissionError,
)


def normalize_base_url(url: str) -> str:
    """'acme.atlassian.net/' -> 'https://acme.atlassian.net'"""
    url = (url or "").strip().rstrip("/")
    if url and not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    return url


class JiraApiClient:
    """
    Session-based Jira client using basic auth (email + API token).
    """

    API_PATH = "rest/api/3"
    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        dry_run: bool = True,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.base_url = normalize_base_url(base_url)
        self.api_url = f"{self.base_url}/{self.API_PATH}"
        self.dry_run = dry_run
        self.timeout = timeout
        self.logger = logging.getLogger("JiraApiClient")

        self._session = requests.Session()
        self._session.auth = (email, api_token)
        self._session.headers["Accept"] = "application/json"
        self._session.headers["Content-Type"] = "application/json"

        self._myself: Optional[dict[str, Any]] = None

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_myself(self) -> dict[str, Any]:
        """The authenticated account (cached after the first call)."""
        if self._myself is None:
            self._myself = self._send("GET", "myself")
        return self._myself

    def get_issue(self, issue_key: str, fields: str) -> dict[str, Any]:
        return self._send("GET", f"issue/{issue_key}", params={"fields": fields})

    def get_transitions(self, issue_key: str) -> list[dict[str, Any]]:
        return self._send("GET", f"issue/{issue_key}/transitions").get("transitions", [])

    def search(self, jql: str, fields: list[str], max_results: int = 20) -> dict[str, Any]:
        """JQL search. POST, but read-only, so it runs in dry-run too."""
        payload = {"jql": jql, "maxResults": max_results, "fields": fields}
        return self._send("POST", "search/jql", json=payload)

    def browse_url(self, issue_key: str) -> str:
        return f"{self.base_url}/browse/{issue_key}"

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def add_comment(self, issue_key: str, body: dict[str, Any]) -> dict[str, Any]:
        return self._write("POST", f"issue/{issue_key}/comment", {"body": body})

    def update_fields(self, issue_key: str, fields: dict[str, Any]) -> dict[str, Any]:
        return self._write("PUT", f"issue/{issue_key}", {"fields": fields})

    def do_transition(self, issue_key: str, transition_id: str) -> dict[str, Any]:
        return self._write(
            "POST", f"issue/{issue_key}/transitions", {"transition": {"id": transition_id}}
        )

    def set_assignee(self, issue_key: str, account_id: str) -> dict[str, Any]:
        return self._write("PUT", f"issue/{issue_key}/assignee", {"accountId": account_id})

    def create_issue(self, fields: dict[str, Any]) -> dict[str, Any]:
        return self._write("POST", "issue", {"fields": fields})

    # -------------------------------------------------------------------------
    # Connection
    # -------------------------------------------------------------------------

    def test_connection(self) -> bool:
        try:
            self.get_myself()
        except IssueTrackerError as e:
            self.logger.warning(f"Connection to {self.base_url} failed: {e}")
            return False
        return True

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _write(self, method: str, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        if self.dry_run:
            self.logger.info(f"[DRY-RUN] Would {method} {path}")
            return {}
        return self._send(method, path, json=payload)

    def _send(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        url = f"{self.api_url}/{path}"
        self.logger.debug(f"{method} {url}")

        try:
            response = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise IssueTrackerError(f"{method} {url} failed: {e}", cause=e)

        if response.ok:
            # 204 and some 201s have no body
            return response.json() if response.text else {}

        status = response.status_code
        if status == 401:
            raise AuthenticationError(
                f"Authentication failed for {self.base_url}. Check the email and API token."
            )

        error_cls = {403: PermissionError, 404: NotFoundError}.get(status, IssueTrackerError)
        raise error_cls(
            f"Jira API error {status} on {path}: {_error_detail(response)}",
            issue_key=path,
        )


def _error_detail(response: requests.Response) -> str:
    """Jira error messages when the body is Jira's error JSON, else raw text."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:500]

    if not isinstance(body, dict):
        return response.text[:500]

    messages = list(body.get("errorMessages") or [])
    messages += [f"{field}: {msg}" for field, msg in (body.get("errors") or {}).items()]
    return "; ".join(messages) or response.text[:500]
