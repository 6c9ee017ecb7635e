"""HTTP gateway for the RightScale API 1.5.

Authenticates with the OAuth2 refresh-token grant on first use and sends
the bearer token on every call. Any transport error or non-2xx response
is raised as ``RemoteOperationFailed``; nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO
from urllib.parse import urlparse

import requests

from rightst.config import Credentials
from rightst.core.errors import RemoteOperationFailed
from rightst.models.attachments import RemoteAttachment, RemoteLink
from rightst.models.scripts import SCRIPTS_COLLECTION, ScriptFields, ScriptSummary

logger = logging.getLogger(__name__)

API_VERSION = "1.5"
OAUTH_PATH = "/api/oauth2"


def _links(data: dict[str, Any]) -> list[RemoteLink]:
    return [
        RemoteLink(rel=str(link.get("rel", "")), href=str(link.get("href", "")))
        for link in data.get("links") or []
    ]


def _id_from(data: dict[str, Any]) -> str:
    """Return the resource id, falling back to the tail of its self link."""
    if data.get("id") is not None:
        return str(data["id"])
    for link in data.get("links") or []:
        if link.get("rel") == "self":
            return str(link.get("href", "")).rstrip("/").rsplit("/", 1)[-1]
    return ""


def script_from_json(data: dict[str, Any]) -> ScriptSummary:
    """Build a ``ScriptSummary`` from an API response object."""
    return ScriptSummary(
        id=_id_from(data),
        name=data.get("name") or "",
        revision=int(data.get("revision") or 0),
        description=data.get("description") or "",
        links=_links(data),
    )


def attachment_from_json(data: dict[str, Any]) -> RemoteAttachment:
    """Build a ``RemoteAttachment`` from an API response object."""
    return RemoteAttachment(
        id=_id_from(data),
        name=data.get("name") or "",
        digest=data.get("digest") or "",
        links=_links(data),
    )


def _script_form(fields: ScriptFields) -> dict[str, str]:
    return {
        "right_script[name]": fields.name,
        "right_script[description]": fields.description,
        "right_script[source]": fields.source,
    }


class HttpGateway:
    """``RemoteScriptGateway`` implementation over ``requests``.

    Parameters
    ----------
    credentials:
        Account, host and refresh token.
    timeout:
        Per-request timeout in seconds, passed straight to ``requests``.
    session:
        Session to send requests through. A new ``requests.Session`` is
        created if not provided.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        timeout: float = 300.0,
        session: requests.Session | None = None,
    ) -> None:
        self._credentials = credentials
        self._timeout = timeout
        self._session = session or requests.Session()
        self._access_token: str | None = None

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _send(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> requests.Response:
        url = f"{self._credentials.base_url}{path}"
        all_headers = {
            "X-API-Version": API_VERSION,
            "X-Account": self._credentials.account,
        }
        all_headers.update(headers or {})
        logger.debug("%s %s", method, url)
        try:
            resp = self._session.request(
                method, url, headers=all_headers, timeout=self._timeout, **kwargs
            )
        except requests.RequestException as exc:
            raise RemoteOperationFailed(operation, path, body=str(exc)) from exc
        logger.debug("%s %s -> %s", method, url, resp.status_code)
        if not 200 <= resp.status_code <= 299:
            raise RemoteOperationFailed(
                operation, path, status=resp.status_code, body=resp.text
            )
        return resp

    def _login(self) -> str:
        resp = self._send(
            "POST",
            OAUTH_PATH,
            operation="login",
            data={
                "grant_type": "refresh_token",
                "refresh_token": self._credentials.refresh_token,
            },
        )
        token = self._json(resp, "login", OAUTH_PATH).get("access_token")
        if not token:
            raise RemoteOperationFailed("login", OAUTH_PATH, body="no access_token in response")
        return token

    def _request(
        self, method: str, path: str, *, operation: str, **kwargs: Any
    ) -> requests.Response:
        if self._access_token is None:
            self._access_token = self._login()
        return self._send(
            method,
            path,
            operation=operation,
            headers={"Authorization": f"Bearer {self._access_token}"},
            **kwargs,
        )

    @staticmethod
    def _json(resp: requests.Response, operation: str, path: str) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise RemoteOperationFailed(
                operation, path, status=resp.status_code, body="invalid JSON response"
            ) from exc

    # ------------------------------------------------------------------
    # Scripts
    # ------------------------------------------------------------------

    def list_scripts(self, name_filter: str) -> list[ScriptSummary]:
        resp = self._request(
            "GET",
            SCRIPTS_COLLECTION,
            operation="list scripts",
            params={"filter[]": f"name=={name_filter}"},
        )
        return [
            script_from_json(d)
            for d in self._json(resp, "list scripts", SCRIPTS_COLLECTION)
        ]

    def get_script(self, handle: str) -> ScriptSummary:
        resp = self._request("GET", handle, operation="show script")
        return script_from_json(self._json(resp, "show script", handle))

    def create_script(self, fields: ScriptFields) -> str:
        resp = self._request(
            "POST", SCRIPTS_COLLECTION, operation="create script", data=_script_form(fields)
        )
        location = resp.headers.get("Location", "")
        if not location:
            raise RemoteOperationFailed(
                "create script",
                SCRIPTS_COLLECTION,
                status=resp.status_code,
                body="missing Location header in response",
            )
        return urlparse(location).path or location

    def update_script(self, handle: str, fields: ScriptFields) -> None:
        self._request("PUT", handle, operation="update script", data=_script_form(fields))

    def fetch_source(self, handle: str) -> bytes:
        resp = self._request("GET", f"{handle}/source", operation="show source")
        return resp.content

    # ------------------------------------------------------------------
    # Attachments
    # ------------------------------------------------------------------

    def list_attachments(self, handle: str) -> list[RemoteAttachment]:
        path = f"{handle}/attachments"
        resp = self._request("GET", path, operation="list attachments")
        return [attachment_from_json(d) for d in self._json(resp, "list attachments", path)]

    def delete_attachment(self, handle: str) -> None:
        self._request("DELETE", handle, operation="delete attachment")

    def create_attachment(self, handle: str, name: str, stream: BinaryIO) -> None:
        self._request(
            "POST",
            f"{handle}/attachments",
            operation="create attachment",
            data={"right_script_attachment[name]": name},
            files={"right_script_attachment[content]": (name, stream)},
        )
