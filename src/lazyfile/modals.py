from __future__ import annotations

import logging
from collections.abc import Callable

from lazyfile.errors import ApiError
from lazyfile.models import AppState, ConfirmModal, FormMode, RemoteFormModal
from lazyfile.rclone import RcloneClient

logger = logging.getLogger(__name__)


class ModalController:
    """Opens, closes and submits the confirm and create/edit overlays."""

    def __init__(self, state: AppState, client: RcloneClient, refresh_remotes: Callable[[], bool]) -> None:
        self.state = state
        self.client = client
        self._refresh_remotes = refresh_remotes

    def open_create(self) -> None:
        if self.state.modal is not None:
            return
        logger.debug("Opening create remote modal")
        self.state.modal = RemoteFormModal(FormMode.CREATE)

    def open_edit(self) -> None:
        name = self.state.selected_remote()
        if self.state.modal is not None or name is None:
            return
        logger.info("Editing remote: %s", name)
        self.state.modal = RemoteFormModal(FormMode.EDIT, name=name)

    def open_delete(self) -> None:
        name = self.state.selected_remote()
        if self.state.modal is not None or name is None:
            return
        logger.debug("Opening delete confirmation for: %s", name)
        self.state.pending_delete = name
        self.state.modal = ConfirmModal("Delete Remote", f"Delete '{name}'?")

    def close(self) -> None:
        self.state.modal = None
        self.state.pending_delete = None

    def confirm(self) -> None:
        modal = self.state.modal
        if not isinstance(modal, ConfirmModal):
            return

        target = self.state.pending_delete
        try:
            if modal.is_confirmed() and target is not None:
                self._delete(target)
            else:
                logger.debug("Delete cancelled")
        finally:
            self.close()

    def _delete(self, name: str) -> None:
        logger.info("Deleting remote: %s", name)
        try:
            self.client.delete_remote(name)
        except ApiError as exc:
            self.state.report_error(f"Error: {exc}", unreachable=exc.unreachable)
            return
        if self._refresh_remotes():
            self.state.report(f"Deleted remote '{name}'")

    def submit_form(self) -> None:
        modal = self.state.modal
        if not isinstance(modal, RemoteFormModal):
            return

        if not modal.is_valid():
            modal.error = "Name and Type are required"
            return

        params = modal.parameters()
        try:
            if modal.mode is FormMode.CREATE:
                logger.info("Creating remote: %s", modal.name)
                self.client.create_remote(modal.name, modal.remote_type, params)
            else:
                logger.info("Updating remote: %s", modal.name)
                self.client.update_remote(modal.name, params)
        except ApiError as exc:
            modal.error = f"Error: {exc}"
            if exc.unreachable:
                self.state.connected = False
            return

        verb = "Created" if modal.mode is FormMode.CREATE else "Updated"
        self.close()
        if self._refresh_remotes():
            self.state.report(f"{verb} remote '{modal.name}'")
