"""
Clubhouse REST API client - fetches members, projects, workflows and stories.
"""

import json
from typing import Any, TypeVar
from urllib.parse import urljoin

import requests
from pydantic import TypeAdapter, ValidationError

from models.tracking import Project, Story, TrackingUser, Workflow
from shared.errors import FetchError

ModelT = TypeVar("ModelT")


class ClubhouseClient:
    """Read-only client for the Clubhouse v2 API.

    One GET per call, first page only, no retries.
    """

    def __init__(self, api_token: str, base_url: str):
        self.api_token = api_token
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.session = requests.Session()

    def fetch_members(self) -> list[TrackingUser]:
        """Fetch all workspace members."""
        return self._fetch_list("members", TrackingUser)

    def fetch_projects(self) -> list[Project]:
        """Fetch all projects across teams."""
        return self._fetch_list("projects", Project)

    def fetch_workflows(self) -> list[Workflow]:
        """Fetch every team's workflow with its states."""
        return self._fetch_list("workflows", Workflow)

    def fetch_stories(self, project_id: int) -> list[Story]:
        """Fetch the stories of one project."""
        return self._fetch_list(f"projects/{project_id}/stories", Story)

    def _fetch_list(self, resource_path: str, model: type[ModelT]) -> list[ModelT]:
        payload = self._get_json(resource_path)
        try:
            return TypeAdapter(list[model]).validate_python(payload)  # type: ignore[valid-type]
        except ValidationError as e:
            raise FetchError(resource_path, "decode", self._redact(e)) from e

    def _get_json(self, resource_path: str) -> Any:
        url = urljoin(self.base_url, resource_path)

        try:
            response = self.session.get(
                url, params={"token": self.api_token}, stream=True
            )
        except requests.RequestException as e:
            raise FetchError(resource_path, "request", self._redact(e)) from e

        try:
            if not response.ok:
                raise FetchError(
                    resource_path,
                    "request",
                    f"HTTP {response.status_code} {response.reason}",
                )
            try:
                body = response.content
            except requests.RequestException as e:
                raise FetchError(resource_path, "read", self._redact(e)) from e
        finally:
            response.close()

        try:
            return json.loads(body)
        except ValueError as e:
            raise FetchError(resource_path, "decode", e) from e

    def _redact(self, error: Exception) -> str:
        # requests/urllib3 error messages echo the URL, token included
        if not self.api_token:
            return str(error)
        return str(error).replace(self.api_token, "<redacted>")
