"""Client for the Jira Service Desk request API."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional, Union

import requests
from dotenv import load_dotenv

API_PATH = "/rest/servicedeskapi/request"


class JiraError(Exception):
    """Raised when Jira answers with an error or an unreadable body."""


@dataclass
class DateTime:
    """A timestamp as Jira reports it, in three renderings."""

    iso8601: str = ""
    jira: str = ""
    friendly: str = ""


@dataclass
class User:
    """A Jira account."""

    account_id: str = ""
    email_address: str = ""
    display_name: str = ""
    active: bool = False
    time_zone: str = ""
    jira_rest: str = ""
    avatar_16: str = ""
    avatar_32: str = ""


@dataclass
class Status:
    """The current status of a request."""

    status: str = ""
    status_category: str = ""
    status_date: DateTime = field(default_factory=DateTime)


@dataclass
class Comment:
    """A comment on a request."""

    id: str = ""
    body: str = ""
    created: DateTime = field(default_factory=DateTime)
    updated: DateTime = field(default_factory=DateTime)
    author: User = field(default_factory=User)
    jsd_public: bool = False


@dataclass
class Issue:
    """A service desk request."""

    issue_id: str = ""
    issue_key: str = ""
    summary: str = ""
    request_type_id: str = ""
    service_desk_id: str = ""
    created_date: DateTime = field(default_factory=DateTime)
    reporter: User = field(default_factory=User)
    request_fields: list[dict[str, Any]] = field(default_factory=list)
    current_status: Status = field(default_factory=Status)
    comments: list[Comment] = field(default_factory=list)
    web_link: str = ""


@dataclass
class TransitionResponse:
    """Jira's answer to a status change."""

    status: str = ""
    status_date: DateTime = field(default_factory=DateTime)


def _mapping(data: Any) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise JiraError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _date_time(data: Any) -> DateTime:
    data = _mapping(data)
    return DateTime(
        iso8601=data.get("iso8601", ""),
        jira=data.get("jira", ""),
        friendly=data.get("friendly", ""),
    )


def _user(data: Any) -> User:
    data = _mapping(data)
    links = _mapping(data.get("_links"))
    avatars = _mapping(links.get("avatarUrls"))
    return User(
        account_id=data.get("accountId", ""),
        email_address=data.get("emailAddress", ""),
        display_name=data.get("displayName", ""),
        active=bool(data.get("active", False)),
        time_zone=data.get("timeZone", ""),
        jira_rest=links.get("jiraRest", ""),
        avatar_16=avatars.get("16x16", ""),
        avatar_32=avatars.get("32x32", ""),
    )


def _status(data: Any) -> Status:
    data = _mapping(data)
    return Status(
        status=data.get("status", ""),
        status_category=data.get("statusCategory", ""),
        status_date=_date_time(data.get("statusDate")),
    )


def _comment(data: Any) -> Comment:
    data = _mapping(data)
    return Comment(
        id=data.get("id", ""),
        body=data.get("body", ""),
        created=_date_time(data.get("created")),
        updated=_date_time(data.get("updated")),
        author=_user(data.get("author")),
        jsd_public=bool(data.get("jsdPublic", False)),
    )


def _issue(data: Any) -> Issue:
    data = _mapping(data)
    return Issue(
        issue_id=data.get("issueId", ""),
        issue_key=data.get("issueKey", ""),
        summary=data.get("summary", ""),
        request_type_id=data.get("requestTypeId", ""),
        service_desk_id=data.get("serviceDeskId", ""),
        created_date=_date_time(data.get("createdDate")),
        reporter=_user(data.get("reporter")),
        request_fields=[
            {
                "fieldId": value.get("fieldId", ""),
                "label": value.get("label", ""),
                "value": value.get("value"),
            }
            for value in map(_mapping, data.get("requestFieldValues") or [])
        ],
        current_status=_status(data.get("currentStatus")),
        comments=[_comment(item) for item in data.get("comments") or []],
        web_link=_mapping(data.get("_links")).get("web", ""),
    )


class JiraService:
    """Reads and updates service desk requests."""

    def __init__(
        self,
        base_url: str,
        email: str,
        token: str,
        service_desk_id: str,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url
        self.email = email
        self.token = token
        self.service_desk_id = service_desk_id
        self.session = session or requests.Session()

    @classmethod
    def from_env(cls) -> "JiraService":
        """Build a service from the JIRA_* environment variables (and a .env file)."""
        load_dotenv()
        return cls(
            base_url=os.environ.get("JIRA_BASE_URL", ""),
            email=os.environ.get("JIRA_EMAIL", ""),
            token=os.environ.get("JIRA_API_TOKEN", ""),
            service_desk_id=os.environ.get("JIRA_SERVICE_DESK_ID", ""),
        )

    def _call(self, method: str, url: str, payload: Any = None) -> dict[str, Any]:
        response = self.session.request(
            method,
            url,
            auth=(self.email, self.token),
            headers={"Accept": "application/json"},
            json=payload,
        )
        if response.status_code != 200:
            raise JiraError(f"jira returned {response.status_code} {response.reason}")
        try:
            body = response.json()
        except ValueError as exc:
            raise JiraError("jira returned a body that is not JSON") from exc
        return _mapping(body)

    def get_tasks(
        self,
        status: str = "",
        limit: Union[int, str] = "50",
        start: Union[int, str] = "0",
    ) -> list[Issue]:
        """List the requests of the service desk, optionally filtered by status."""
        url = (
            f"{self.base_url}{API_PATH}?serviceDeskId={self.service_desk_id}"
            f"&limit={limit}&start={start}"
        )
        if status:
            url += f"&status={status}"
        body = self._call("GET", url)
        return [_issue(item) for item in body.get("values") or []]

    def get_comments(
        self,
        issue_id: str,
        limit: Union[int, str] = "100",
        start: Union[int, str] = "0",
    ) -> list[Comment]:
        """List the comments of one request."""
        url = f"{self.base_url}{API_PATH}/{issue_id}/comment?limit={limit}&start={start}"
        body = self._call("GET", url)
        return [_comment(item) for item in body.get("values") or []]

    def get_task(self, issue_id: str) -> Issue:
        """Fetch one request."""
        return _issue(self._call("GET", f"{self.base_url}{API_PATH}/{issue_id}"))

    def get_task_with_comments(self, issue_id: str) -> Issue:
        """Fetch one request together with its first hundred comments."""
        issue = self.get_task(issue_id)
        issue.comments = self.get_comments(issue_id, "100", "0")
        return issue

    def change_status(self, issue_id: str, new_status: str) -> TransitionResponse:
        """Move a request to another status."""
        body = self._call(
            "PUT",
            f"{self.base_url}{API_PATH}/{issue_id}/status",
            {"status": new_status},
        )
        return TransitionResponse(
            status=body.get("status", ""),
            status_date=_date_time(body.get("statusDate")),
        )