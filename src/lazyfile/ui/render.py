from __future__ import annotations

import curses
from collections.abc import Callable

from lazyfile.models import AppState, ConfirmModal, FileItem, FormField, Panel, RemoteFormModal
from lazyfile.ui.layout import CONFIRM_SIZE, FORM_SIZE, LayoutEngine, Rect, centered

HELP_TEXT = "j/k: Navigate | a: Add | e: Edit | d: Delete | Enter: Open | Backspace: Back | Tab: Panel | r: Reload | q: Quit"
FORM_HELP = "Tab: Next | Enter: Save | Esc: Cancel"
CONFIRM_HELP = "Tab: Switch | Enter: Confirm | Esc: Cancel"

PAIR_ACCENT = 1
PAIR_SELECTED = 2
PAIR_STATUS = 3
PAIR_DANGER = 4
PAIR_WARN = 5
FIELD_WIDTH = 30


def format_size(size: int) -> str:
    if size < 0:
        return "-"
    value = float(size)
    for unit in ("B", "K", "M", "G", "T"):
        if value < 1024 or unit == "T":
            return f"{int(value)}{unit}" if unit == "B" else f"{value:.1f}{unit}"
        value /= 1024
    return f"{size}B"


def file_label(item: FileItem) -> str:
    if item.is_dir:
        return f"[{item.name}]"
    return item.name


def field_display(value: str, width: int = FIELD_WIDTH) -> str:
    # Keep the end of long values visible, where the cursor sits.
    if len(value) <= width:
        return value
    return f"...{value[-(width - 3):]}"


def status_text(state: AppState) -> str:
    status = "Connected" if state.connected else "Disconnected"
    text = f"  {state.display_path} | {status}  "
    if state.message:
        text += state.message
    return text


class Renderer:
    def __init__(self, state: AppState, layout: LayoutEngine, stdscr_getter: Callable[[], curses.window | None]) -> None:
        self.state = state
        self.layout = layout
        self._stdscr_getter = stdscr_getter
        self._colors = False

    def init_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK
        curses.init_pair(PAIR_ACCENT, curses.COLOR_CYAN, background)
        curses.init_pair(PAIR_SELECTED, curses.COLOR_BLACK, curses.COLOR_CYAN)
        curses.init_pair(PAIR_STATUS, curses.COLOR_BLACK, curses.COLOR_WHITE)
        curses.init_pair(PAIR_DANGER, curses.COLOR_RED, background)
        curses.init_pair(PAIR_WARN, curses.COLOR_YELLOW, background)
        self._colors = True

    def _attr(self, pair: int, fallback: int = curses.A_NORMAL) -> int:
        if self._colors:
            return curses.color_pair(pair)
        return fallback

    def _put(self, y: int, x: int, text: str, width: int, attr: int = curses.A_NORMAL) -> None:
        stdscr = self._stdscr_getter()
        if stdscr is None or width <= 0:
            return
        try:
            stdscr.addnstr(y, x, text.replace("\n", " "), width, attr)
        except curses.error:
            # Writing the bottom-right cell raises after the text is drawn.
            pass

    def draw(self) -> None:
        stdscr = self._stdscr_getter()
        if stdscr is None:
            return

        stdscr.erase()
        rects = self.layout.rects()
        if rects is None:
            return

        self._put(0, 0, HELP_TEXT, rects.help.width - 1, self._attr(PAIR_ACCENT) | curses.A_BOLD)
        self.draw_list(
            rects.remotes,
            "Remotes",
            self.state.remotes,
            self.state.remotes_selected,
            self.state.remotes_top,
            self.state.focused_panel is Panel.REMOTES,
        )
        self.draw_files(rects.files)
        self._put(
            rects.status.y,
            0,
            status_text(self.state).ljust(rects.status.width),
            rects.status.width,
            self._attr(PAIR_STATUS, curses.A_REVERSE),
        )

        modal = self.state.modal
        if isinstance(modal, ConfirmModal):
            self.draw_confirm(modal)
        elif isinstance(modal, RemoteFormModal):
            self.draw_form(modal)
        else:
            try:
                curses.curs_set(0)
            except curses.error:
                pass

        stdscr.refresh()

    def draw_box(self, area: Rect, title: str, attr: int) -> None:
        stdscr = self._stdscr_getter()
        if stdscr is None or area.height < 2 or area.width < 2:
            return
        bottom = area.y + area.height - 1
        right = area.x + area.width - 1
        for row in range(area.y, bottom + 1):
            self._put(row, area.x, " " * area.width, area.width)
        try:
            stdscr.attron(attr)
            stdscr.hline(area.y, area.x + 1, curses.ACS_HLINE, area.width - 2)
            stdscr.hline(bottom, area.x + 1, curses.ACS_HLINE, area.width - 2)
            stdscr.vline(area.y + 1, area.x, curses.ACS_VLINE, area.height - 2)
            stdscr.vline(area.y + 1, right, curses.ACS_VLINE, area.height - 2)
            stdscr.addch(area.y, area.x, curses.ACS_ULCORNER)
            stdscr.addch(area.y, right, curses.ACS_URCORNER)
            stdscr.addch(bottom, area.x, curses.ACS_LLCORNER)
            stdscr.insch(bottom, right, curses.ACS_LRCORNER)
        except curses.error:
            pass
        finally:
            stdscr.attroff(attr)
        self._put(area.y, area.x + 1, f" {title} ", area.width - 2, attr)

    def draw_list(self, area: Rect, title: str, labels: list[str], selected: int, top: int, focused: bool) -> None:
        border = self._attr(PAIR_ACCENT) | curses.A_BOLD if focused else curses.A_NORMAL
        self.draw_box(area, title, border)
        rows = self.layout.list_rows(area)
        inner_w = area.width - 2
        for i, label in enumerate(labels[top : top + rows]):
            idx = top + i
            attr = curses.A_NORMAL
            if idx == selected:
                attr = self._attr(PAIR_SELECTED, curses.A_REVERSE) | curses.A_BOLD
            self._put(area.y + 1 + i, area.x + 1, label.ljust(inner_w), inner_w, attr)

    def draw_files(self, area: Rect) -> None:
        inner_w = max(0, area.width - 2)
        labels = []
        for item in self.state.files:
            name = file_label(item)
            size = "" if item.is_dir else format_size(item.size)
            pad = max(1, inner_w - len(name) - len(size))
            labels.append(f"{name}{' ' * pad}{size}" if size else name)
        self.draw_list(
            area,
            "Files",
            labels,
            self.state.files_selected,
            self.state.files_top,
            self.state.focused_panel is Panel.FILES,
        )

    def draw_confirm(self, modal: ConfirmModal) -> None:
        stdscr = self._stdscr_getter()
        if stdscr is None:
            return
        h, w = stdscr.getmaxyx()
        area = centered(h, w, CONFIRM_SIZE)
        danger = self._attr(PAIR_DANGER)
        warn = self._attr(PAIR_WARN)
        self.draw_box(area, modal.title, danger)
        inner_w = area.width - 2
        x = area.x + 1
        self._put(area.y + 2, x, modal.message, inner_w)

        half = inner_w // 2
        yes_attr = danger | (curses.A_REVERSE | curses.A_BOLD if modal.is_confirmed() else 0)
        no_attr = warn | (curses.A_BOLD | curses.A_REVERSE if not modal.is_confirmed() else 0)
        self._put(area.y + 4, x, " Yes ".center(half), half, yes_attr)
        self._put(area.y + 4, x + half, " No ".center(inner_w - half), inner_w - half, no_attr)
        self._put(area.y + area.height - 2, x, CONFIRM_HELP, inner_w, curses.A_DIM)
        try:
            curses.curs_set(0)
        except curses.error:
            pass

    def draw_form(self, modal: RemoteFormModal) -> None:
        stdscr = self._stdscr_getter()
        if stdscr is None:
            return
        h, w = stdscr.getmaxyx()
        area = centered(h, w, FORM_SIZE)
        accent = self._attr(PAIR_ACCENT)
        self.draw_box(area, modal.title, accent)
        inner_w = area.width - 2
        x = area.x + 1

        cursor = None
        fields = ((FormField.NAME, "Name"), (FormField.TYPE, "Type"), (FormField.PATH, "Path"))
        for i, (which, label) in enumerate(fields):
            y = area.y + 1 + i * 2
            text = f"{label}: {field_display(modal.field_value(which))}"
            focused = modal.focus_field is which
            attr = self._attr(PAIR_WARN) | curses.A_BOLD if focused else curses.A_NORMAL
            self._put(y, x, text, inner_w, attr)
            if focused:
                self._put(y + 1, x, "-" * inner_w, inner_w, accent)
                cursor = (y, min(x + len(text), x + inner_w - 1))

        if modal.error:
            self._put(area.y + area.height - 2, x, modal.error, inner_w, self._attr(PAIR_DANGER, curses.A_BOLD))
        else:
            self._put(area.y + area.height - 2, x, FORM_HELP, inner_w, curses.A_DIM)

        if cursor is not None:
            try:
                curses.curs_set(1)
                stdscr.move(*cursor)
            except curses.error:
                pass
