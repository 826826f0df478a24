"""Thin httpx wrapper with one method per CloudHub endpoint.

Every method returns the decoded JSON body. Failed responses raise
:class:`CloudHubAPIError` carrying the ``error`` message the server sent,
which front ends show as a notification.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class CloudHubAPIError(Exception):
    """A CloudHub request failed."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class CloudHubClient:
    """Client for the CloudHub REST API.

    Args:
        base_url: Server root, e.g. ``http://localhost:8000``.
        token: Static bearer token, if the server enforces one.
        user_email: Sent as ``X-User-Email`` on every request. Set it after
            login with :meth:`set_user`.
        transport: Optional httpx transport (tests pass ``MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        user_email: str | None = None,
        transport: httpx.BaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        headers: dict[str, str] = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            transport=transport,
            timeout=timeout,
        )
        self.user_email = user_email

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> CloudHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def set_user(self, email: str | None) -> None:
        self.user_email = email

    # --- plumbing ---

    def _headers(self) -> dict[str, str]:
        return {"X-User-Email": self.user_email} if self.user_email else {}

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = {**self._headers(), **kwargs.pop("headers", {})}
        try:
            response = self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise CloudHubAPIError(0, f"Could not reach server: {exc}") from exc

        if response.is_success:
            return response.json() if response.content else None

        message = f"Request failed with status {response.status_code}"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            message = str(body["error"])
        raise CloudHubAPIError(response.status_code, message)

    @staticmethod
    def _user_path(prefix: str, email: str, suffix: str = "") -> str:
        return f"/api/{prefix}/{quote(email, safe='@')}{suffix}"

    # --- auth ---

    def check_email(self, email: str) -> bool:
        return bool(self._request("POST", "/api/auth/check-email", json={"email": email})["exists"])

    def check_roll_no(self, roll_no: str) -> bool:
        return bool(
            self._request("POST", "/api/auth/check-rollno", json={"rollNo": roll_no})["exists"]
        )

    def signup(self, data: Mapping[str, Any]) -> dict:
        return self._request("POST", "/api/auth/signup", json=dict(data))

    def login(self, email: str, password: str) -> dict:
        """Log in and remember the email for later requests."""
        result = self._request(
            "POST", "/api/auth/login", json={"email": email, "password": password}
        )
        self.set_user(result["user"]["email"])
        return result

    # --- account and bulk load ---

    def get_user(self, email: str) -> dict:
        return self._request("GET", self._user_path("users", email))

    def update_user(self, email: str, fields: Mapping[str, Any]) -> dict:
        return self._request("PUT", self._user_path("users", email), json=dict(fields))

    def load_user_data(self, email: str) -> dict:
        return self._request("GET", self._user_path("user-data", email))

    # --- collections ---

    def get_collection(self, kind: str, email: str) -> list[dict]:
        return self._request("GET", self._user_path(kind, email))

    def save_collection(self, kind: str, email: str, items: Sequence[Mapping[str, Any]]) -> dict:
        """Replace the whole collection with ``items``."""
        return self._request(
            "POST", self._user_path(kind, email), json=[dict(item) for item in items]
        )

    def get_projects(self, email: str) -> list[dict]:
        return self.get_collection("projects", email)

    def save_projects(self, email: str, items: Sequence[Mapping[str, Any]]) -> dict:
        return self.save_collection("projects", email, items)

    def get_certificates(self, email: str) -> list[dict]:
        return self.get_collection("certificates", email)

    def save_certificates(self, email: str, items: Sequence[Mapping[str, Any]]) -> dict:
        return self.save_collection("certificates", email, items)

    def get_notes(self, email: str) -> list[dict]:
        return self.get_collection("notes", email)

    def save_notes(self, email: str, items: Sequence[Mapping[str, Any]]) -> dict:
        return self.save_collection("notes", email, items)

    def get_resumes(self, email: str) -> list[dict]:
        return self.get_collection("resumes", email)

    def save_resumes(self, email: str, items: Sequence[Mapping[str, Any]]) -> dict:
        return self.save_collection("resumes", email, items)

    # --- singletons ---

    def get_portfolio(self, email: str) -> dict:
        return self._request("GET", self._user_path("portfolio", email))

    def save_portfolio(self, email: str, data: Mapping[str, Any]) -> dict:
        return self._request("POST", self._user_path("portfolio", email), json=dict(data))

    def get_public_portfolio(self, email: str) -> dict:
        return self._request("GET", self._user_path("portfolio", email, "/public"))

    def get_profile(self, email: str) -> dict:
        return self._request("GET", self._user_path("profile", email))

    def save_profile(self, email: str, data: Mapping[str, Any]) -> dict:
        return self._request("POST", self._user_path("profile", email), json=dict(data))

    # --- admin ---

    def list_users(self, status: str | None = None) -> dict:
        params = {"status": status} if status else None
        return self._request("GET", "/api/admin/pending-users", params=params)

    def update_status(self, email: str, status: str) -> dict:
        return self._request(
            "POST", "/api/admin/update-status", json={"email": email, "status": status}
        )

    def approve_user(self, email: str) -> dict:
        return self.update_status(email, "approved")

    def reject_user(self, email: str) -> dict:
        return self.update_status(email, "rejected")

    def delete_user(self, email: str) -> dict:
        return self._request("DELETE", self._user_path("admin/users", email))

    # --- teacher ---

    def list_students(
        self,
        search: str | None = None,
        department: str | None = None,
        year_semester: str | None = None,
    ) -> dict:
        params = {
            key: value
            for key, value in (
                ("search", search),
                ("department", department),
                ("yearSemester", year_semester),
            )
            if value
        }
        return self._request("GET", "/api/teacher/students", params=params)

    def get_student_files(self, email: str) -> dict:
        return self._request("GET", self._user_path("teacher/student-files", email))

    # --- storage ---

    def upload_file(
        self,
        kind: str,
        email: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> dict:
        return self._request(
            "POST",
            "/api/storage/upload",
            data={"type": kind, "email": email},
            files={"file": (filename, content, content_type)},
        )

    def get_file_url(self, file_path: str) -> str:
        return self._request("POST", "/api/storage/url", json={"filePath": file_path})["url"]

    def delete_file(self, file_path: str) -> dict:
        return self._request("DELETE", f"/api/storage/files/{file_path.lstrip('/')}")
