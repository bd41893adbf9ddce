from __future__ import annotations

import curses
import logging

from lazyfile.errors import ApiError
from lazyfile.input import InputController
from lazyfile.modals import ModalController
from lazyfile.models import AppState, FileItem, Panel
from lazyfile.rclone import RcloneClient
from lazyfile.ui.layout import LayoutEngine
from lazyfile.ui.render import Renderer

logger = logging.getLogger(__name__)


def child_path(path: str, name: str) -> str:
    return f"{path}/{name}"


def parent_path(path: str) -> str:
    idx = path.rfind("/")
    if idx < 0:
        return ""
    return path[:idx]


class LazyFileApp:
    def __init__(self, stdscr: curses.window | None, client: RcloneClient) -> None:
        self.stdscr = stdscr
        self.client = client
        self.state = AppState()

        self.layout = LayoutEngine(self.state, self._get_stdscr)
        self.modals = ModalController(self.state, self.client, self.refresh_remotes)
        self.input = InputController(
            state=self.state,
            layout=self.layout,
            modals=self.modals,
            move_selection=self.move_selection,
            switch_panel=self.switch_panel,
            enter_selected=self.enter_selected,
            go_back=self.go_back,
            reload_focused=self.reload_focused,
        )
        self.renderer = Renderer(self.state, self.layout, self._get_stdscr)

    def _get_stdscr(self) -> curses.window | None:
        return self.stdscr

    def run(self) -> None:
        if self.stdscr is None:
            raise RuntimeError("stdscr is required to run LazyFileApp")

        curses.curs_set(0)
        self.stdscr.nodelay(True)
        self.stdscr.timeout(50)
        self.stdscr.keypad(True)
        self.renderer.init_colors()

        while self.state.running:
            self.layout.ensure_visible()
            self.renderer.draw()
            try:
                key = self.stdscr.get_wch()
            except curses.error:
                # No input before the timeout.
                continue
            if not self.input.handle_key(key):
                break
        logger.debug("Application exiting")

    def load_remotes(self) -> None:
        """Replace the remote list with a fresh listing; raises ApiError."""
        remotes = self.client.list_remotes()
        self.state.remotes = remotes
        self.state.remotes_selected = 0
        self.state.remotes_top = 0
        if self.state.current_remote is not None and self.state.current_remote not in remotes:
            logger.info("Remote %s is gone, leaving file view", self.state.current_remote)
            self._leave_remote()
        self.state.report(f"Loaded {len(remotes)} remotes")
        logger.info("Loaded %d remotes", len(remotes))

    def refresh_remotes(self) -> bool:
        try:
            self.load_remotes()
        except ApiError as exc:
            self.state.report_error(f"Error: {exc}", unreachable=exc.unreachable)
            return False
        return True

    def _fetch_files(self, remote: str, path: str) -> list[FileItem] | None:
        try:
            items = self.client.list_files(remote, path)
        except ApiError as exc:
            self.state.report_error(f"Error: {exc}", unreachable=exc.unreachable)
            return None
        logger.info("Loaded %d files from %s:%s", len(items), remote, path)
        return items

    def _show_files(self, remote: str, path: str, items: list[FileItem]) -> None:
        self.state.current_remote = remote
        self.state.current_path = path
        self.state.files = items
        self.state.files_selected = 0
        self.state.files_top = 0
        self.state.report(f"{remote}:{path} ({len(items)} entries)")

    def _leave_remote(self) -> None:
        self.state.current_remote = None
        self.state.current_path = ""
        self.state.files = []
        self.state.files_selected = 0
        self.state.files_top = 0
        self.state.focused_panel = Panel.REMOTES

    def move_selection(self, delta: int) -> None:
        if self.state.focused_panel is Panel.REMOTES:
            if not self.state.remotes:
                return
            last = len(self.state.remotes) - 1
            self.state.remotes_selected = max(0, min(last, self.state.remotes_selected + delta))
            logger.debug("Remote selection: %d", self.state.remotes_selected)
        else:
            if not self.state.files:
                return
            last = len(self.state.files) - 1
            self.state.files_selected = max(0, min(last, self.state.files_selected + delta))
            logger.debug("File selection: %d", self.state.files_selected)

    def switch_panel(self) -> None:
        self.state.focused_panel = Panel.FILES if self.state.focused_panel is Panel.REMOTES else Panel.REMOTES
        logger.debug("Focus: %s", self.state.focused_panel.value)

    def enter_selected(self) -> None:
        if self.state.focused_panel is Panel.REMOTES:
            self.open_remote()
        else:
            self.open_directory()

    def open_remote(self) -> None:
        remote = self.state.selected_remote()
        if remote is None:
            return
        logger.info("Selecting remote: %s", remote)
        items = self._fetch_files(remote, "")
        if items is None:
            return
        self._show_files(remote, "", items)
        self.state.focused_panel = Panel.FILES

    def open_directory(self) -> None:
        entry = self.state.selected_file()
        remote = self.state.current_remote
        # TODO: preview or download for plain files once the daemon calls are wired in.
        if entry is None or not entry.is_dir or remote is None:
            return
        target = child_path(self.state.current_path, entry.name)
        logger.debug("Opening directory: %s", target)
        items = self._fetch_files(remote, target)
        if items is not None:
            self._show_files(remote, target, items)

    def go_back(self) -> None:
        if self.state.focused_panel is not Panel.FILES:
            return

        remote = self.state.current_remote
        if not self.state.current_path or remote is None:
            logger.info("Going back to remotes")
            self._leave_remote()
            self.state.message = ""
            return

        target = parent_path(self.state.current_path)
        logger.debug("Going back from %s to %s", self.state.current_path, target)
        items = self._fetch_files(remote, target)
        if items is not None:
            self._show_files(remote, target, items)

    def reload_focused(self) -> None:
        if self.state.focused_panel is Panel.REMOTES or self.state.current_remote is None:
            self.refresh_remotes()
            return

        remote = self.state.current_remote
        items = self._fetch_files(remote, self.state.current_path)
        if items is None:
            return
        selected = self.state.files_selected
        self._show_files(remote, self.state.current_path, items)
        if items:
            self.state.files_selected = min(selected, len(items) - 1)
