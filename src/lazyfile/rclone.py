"""Client for the rclone remote-control daemon (``rclone rcd``)."""

from __future__ import annotations

import logging
from typing import Any

import requests

from lazyfile.config import RcConfig
from lazyfile.errors import ApiError
from lazyfile.models import FileItem

logger = logging.getLogger(__name__)

LIST_REMOTES = "config/listremotes"
LIST_FILES = "operations/list"
CREATE_REMOTE = "config/create"
UPDATE_REMOTE = "config/update"
DELETE_REMOTE = "config/delete"


def build_fs(remote: str, path: str) -> str:
    return f"{remote}:{path}"


def parse_file_item(raw: Any) -> FileItem:
    if not isinstance(raw, dict):
        raise ApiError("Unexpected file entry from rclone")
    name = raw.get("Name")
    size = raw.get("Size", 0)
    mod_time = raw.get("ModTime", "")
    is_dir = raw.get("IsDir", False)
    if (
        not isinstance(name, str)
        or not isinstance(size, int)
        or isinstance(size, bool)
        or not isinstance(mod_time, str)
        or not isinstance(is_dir, bool)
    ):
        raise ApiError("Unexpected file entry from rclone")
    return FileItem(name=name, size=size, mod_time=mod_time, is_dir=is_dir)


class RcloneClient:
    def __init__(self, config: RcConfig | None = None, session: requests.Session | None = None) -> None:
        self.config = config or RcConfig()
        self.session = session or requests.Session()
        if self.config.auth is not None:
            self.session.auth = self.config.auth

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _post(self, method: str, payload: dict[str, Any] | None, action: str) -> requests.Response:
        url = f"{self.base_url}/{method}"
        logger.debug("POST %s", url)
        try:
            response = self.session.post(url, json=payload, timeout=self.config.timeout)
        except requests.exceptions.Timeout as exc:
            logger.error("Timed out talking to rclone at %s", self.base_url)
            raise ApiError(f"Failed to {action}: connection timed out", unreachable=True) from exc
        except requests.exceptions.ConnectionError as exc:
            logger.error("Cannot reach rclone at %s: %s", self.base_url, exc)
            raise ApiError(
                f"Failed to {action}: cannot reach rclone at {self.base_url}", unreachable=True
            ) from exc
        except requests.exceptions.RequestException as exc:
            logger.error("Request to %s failed: %s", url, exc)
            raise ApiError(f"Failed to {action}: {exc}") from exc
        return response

    def _json(self, response: requests.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise ApiError("Unexpected response format from rclone", status=response.status_code) from exc
        if not isinstance(data, dict):
            raise ApiError("Unexpected response format from rclone", status=response.status_code)
        return data

    def _call(self, method: str, payload: dict[str, Any], action: str) -> None:
        response = self._post(method, payload, action)
        if not response.ok:
            body = response.text
            logger.error("Failed to %s: %s %s", action, response.status_code, body)
            raise ApiError(f"Failed to {action}: {body}", status=response.status_code, body=body)

    def list_remotes(self) -> list[str]:
        response = self._post(LIST_REMOTES, None, "list remotes")
        if not response.ok:
            logger.error("Failed to list remotes: %s", response.status_code)
            raise ApiError(
                f"Failed to list remotes: {response.status_code}",
                status=response.status_code,
                body=response.text,
            )

        data = self._json(response)
        remotes = data.get("remotes")
        if not isinstance(remotes, list) or not all(isinstance(r, str) for r in remotes):
            logger.error("Unexpected response format from rclone: %r", data)
            raise ApiError("Unexpected response format from rclone", status=response.status_code)
        logger.debug("Found %d remotes", len(remotes))
        return list(remotes)

    def list_files(self, remote: str, path: str) -> list[FileItem]:
        fs = build_fs(remote, path)
        logger.debug("Listing files in %s", fs)
        response = self._post(LIST_FILES, {"fs": fs, "remote": ""}, "list files")
        if not response.ok:
            logger.error("Failed to list files in %s: %s", fs, response.status_code)
            raise ApiError(
                f"Failed to list files: {response.status_code}",
                status=response.status_code,
                body=response.text,
            )

        data = self._json(response)
        raw_items = data.get("list")
        if raw_items is None:
            return []
        if not isinstance(raw_items, list):
            raise ApiError("Unexpected response format from rclone", status=response.status_code)
        items = [parse_file_item(raw) for raw in raw_items]
        logger.debug("Found %d items in %s", len(items), fs)
        return items

    def create_remote(self, name: str, remote_type: str, parameters: dict[str, str]) -> None:
        logger.debug("Creating remote %s (type: %s)", name, remote_type)
        payload: dict[str, Any] = {"name": name, "type": remote_type}
        if parameters:
            payload["parameters"] = dict(parameters)
        self._call(CREATE_REMOTE, payload, "create remote")

    def update_remote(self, name: str, parameters: dict[str, str]) -> None:
        logger.debug("Updating remote %s", name)
        payload: dict[str, Any] = {"name": name}
        if parameters:
            payload["parameters"] = dict(parameters)
        self._call(UPDATE_REMOTE, payload, "update remote")

    def delete_remote(self, name: str) -> None:
        logger.debug("Deleting remote %s", name)
        self._call(DELETE_REMOTE, {"name": name}, "delete remote")
