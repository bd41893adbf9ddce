from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from lazyfile.models import AppState

CONFIRM_SIZE = (9, 45)
FORM_SIZE = (11, 50)


@dataclass(frozen=True)
class Rect:
    y: int
    x: int
    height: int
    width: int


@dataclass(frozen=True)
class LayoutRects:
    help: Rect
    remotes: Rect
    files: Rect
    status: Rect


def split(height: int, width: int) -> LayoutRects:
    content_h = max(1, height - 2)
    remotes_w = max(1, (width * 30) // 100)
    files_w = max(1, width - remotes_w)
    return LayoutRects(
        help=Rect(0, 0, 1, width),
        remotes=Rect(1, 0, content_h, remotes_w),
        files=Rect(1, remotes_w, content_h, files_w),
        status=Rect(height - 1, 0, 1, width),
    )


def centered(height: int, width: int, size: tuple[int, int]) -> Rect:
    want_h, want_w = size
    box_w = min(want_w, max(1, width - 4))
    box_h = min(want_h, max(1, height - 2))
    return Rect((height - box_h) // 2, (width - box_w) // 2, box_h, box_w)


def scroll_top(selected: int, top: int, rows: int, total: int) -> int:
    if rows <= 0 or total <= 0:
        return 0
    if selected < top:
        top = selected
    elif selected >= top + rows:
        top = selected - rows + 1
    return max(0, min(top, max(0, total - rows)))


class LayoutEngine:
    def __init__(self, state: AppState, stdscr_getter: Callable[[], object | None]) -> None:
        self.state = state
        self._stdscr_getter = stdscr_getter

    def rects(self) -> LayoutRects | None:
        stdscr = self._stdscr_getter()
        if stdscr is None:
            return None
        h, w = stdscr.getmaxyx()
        return split(h, w)

    @staticmethod
    def list_rows(area: Rect) -> int:
        # Borders take the first and last row.
        return max(0, area.height - 2)

    def ensure_visible(self) -> None:
        rects = self.rects()
        if rects is None:
            return
        self.state.remotes_top = scroll_top(
            self.state.remotes_selected,
            self.state.remotes_top,
            self.list_rows(rects.remotes),
            len(self.state.remotes),
        )
        self.state.files_top = scroll_top(
            self.state.files_selected,
            self.state.files_top,
            self.list_rows(rects.files),
            len(self.state.files),
        )
