from __future__ import annotations

import curses
from collections.abc import Callable

from lazyfile.modals import ModalController
from lazyfile.models import AppState, ConfirmModal, Panel, RemoteFormModal
from lazyfile.ui.layout import LayoutEngine

KEY_TAB = 9
KEY_ESC = 27
ENTER_KEYS = (curses.KEY_ENTER, 10, 13)
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)


def key_code(key: int | str) -> int | str:
    """Map get_wch() results onto the int codes the key tables use.

    ASCII and control characters become ints. Other printable characters
    stay as str so they can be typed into form fields.
    """
    if isinstance(key, str) and len(key) == 1 and (key.isascii() or not key.isprintable()):
        return ord(key)
    return key


def printable(key: int | str) -> str | None:
    if isinstance(key, str):
        return key if key.isprintable() else None
    if 32 <= key <= 126:
        return chr(key)
    return None


class InputController:
    def __init__(
        self,
        state: AppState,
        layout: LayoutEngine,
        modals: ModalController,
        move_selection: Callable[[int], None],
        switch_panel: Callable[[], None],
        enter_selected: Callable[[], None],
        go_back: Callable[[], None],
        reload_focused: Callable[[], None],
    ) -> None:
        self.state = state
        self.layout = layout
        self.modals = modals
        self._move_selection = move_selection
        self._switch_panel = switch_panel
        self._enter_selected = enter_selected
        self._go_back = go_back
        self._reload_focused = reload_focused

    def handle_confirm_key(self, modal: ConfirmModal, key: int | str) -> None:
        if key == KEY_ESC:
            self.modals.close()
        elif key in (KEY_TAB, curses.KEY_LEFT, curses.KEY_RIGHT):
            modal.toggle()
        elif key in (ord("y"), ord("n")):
            modal.choose(key == ord("y"))
        elif key in ENTER_KEYS:
            self.modals.confirm()

    def handle_form_key(self, modal: RemoteFormModal, key: int | str) -> None:
        if key == KEY_ESC:
            self.modals.close()
        elif key == KEY_TAB:
            modal.next_field()
        elif key == curses.KEY_BTAB:
            modal.prev_field()
        elif key in ENTER_KEYS:
            self.modals.submit_form()
        elif key in BACKSPACE_KEYS:
            modal.backspace()
        else:
            ch = printable(key)
            if ch is not None:
                modal.input_char(ch)

    def handle_key(self, key: int | str) -> bool:
        key = key_code(key)
        if key in (curses.KEY_RESIZE,):
            return self.state.running

        # An open modal swallows every key, including quit.
        modal = self.state.modal
        if isinstance(modal, ConfirmModal):
            self.handle_confirm_key(modal, key)
            return self.state.running
        if isinstance(modal, RemoteFormModal):
            self.handle_form_key(modal, key)
            return self.state.running

        on_remotes = self.state.focused_panel is Panel.REMOTES
        if key in (ord("q"), ord("Q")):
            self.state.running = False
            return False

        if key in (curses.KEY_DOWN, ord("j")):
            self._move_selection(1)
        elif key in (curses.KEY_UP, ord("k")):
            self._move_selection(-1)
        elif key == KEY_TAB:
            self._switch_panel()
        elif key in ENTER_KEYS:
            self._enter_selected()
        elif key in BACKSPACE_KEYS:
            self._go_back()
        elif key in (ord("r"),):
            self._reload_focused()
        elif key in (ord("a"),) and on_remotes:
            self.modals.open_create()
        elif key in (ord("e"),) and on_remotes:
            self.modals.open_edit()
        elif key in (ord("d"),) and on_remotes:
            self.modals.open_delete()

        self.layout.ensure_visible()
        return self.state.running
