from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass
class FileItem:
    name: str
    size: int
    mod_time: str
    is_dir: bool


class Panel(Enum):
    REMOTES = "remotes"
    FILES = "files"


class ConfirmChoice(Enum):
    YES = "yes"
    NO = "no"


@dataclass
class ConfirmModal:
    title: str
    message: str
    # Destructive actions need an explicit Yes.
    choice: ConfirmChoice = ConfirmChoice.NO

    def toggle(self) -> None:
        self.choice = ConfirmChoice.NO if self.choice is ConfirmChoice.YES else ConfirmChoice.YES

    def choose(self, confirmed: bool) -> None:
        if confirmed != self.is_confirmed():
            self.toggle()

    def is_confirmed(self) -> bool:
        return self.choice is ConfirmChoice.YES


class FormMode(Enum):
    CREATE = "create"
    EDIT = "edit"


class FormField(Enum):
    NAME = "name"
    TYPE = "type"
    PATH = "path"


_FIELD_ORDER = (FormField.NAME, FormField.TYPE, FormField.PATH)
DEFAULT_REMOTE_TYPE = "local"


@dataclass
class RemoteFormModal:
    mode: FormMode
    name: str = ""
    remote_type: str = DEFAULT_REMOTE_TYPE
    path: str = ""
    focus_field: FormField = FormField.NAME
    error: str | None = None

    @property
    def title(self) -> str:
        return "Create Remote" if self.mode is FormMode.CREATE else "Edit Remote"

    def _shift_field(self, step: int) -> None:
        idx = _FIELD_ORDER.index(self.focus_field)
        self.focus_field = _FIELD_ORDER[(idx + step) % len(_FIELD_ORDER)]

    def next_field(self) -> None:
        self._shift_field(1)

    def prev_field(self) -> None:
        self._shift_field(-1)

    def field_value(self, which: FormField) -> str:
        if which is FormField.NAME:
            return self.name
        if which is FormField.TYPE:
            return self.remote_type
        return self.path

    def _set_focused(self, value: str) -> None:
        if self.focus_field is FormField.NAME:
            self.name = value
        elif self.focus_field is FormField.TYPE:
            self.remote_type = value
        else:
            self.path = value

    def input_char(self, ch: str) -> None:
        self._set_focused(self.field_value(self.focus_field) + ch)
        self.error = None

    def backspace(self) -> None:
        self._set_focused(self.field_value(self.focus_field)[:-1])
        self.error = None

    def is_valid(self) -> bool:
        return bool(self.name) and bool(self.remote_type)

    def parameters(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.path:
            params["path"] = self.path
        return params


Modal = ConfirmModal | RemoteFormModal


@dataclass
class AppState:
    remotes: list[str] = field(default_factory=list)
    remotes_selected: int = 0
    remotes_top: int = 0
    current_remote: str | None = None
    current_path: str = ""
    files: list[FileItem] = field(default_factory=list)
    files_selected: int = 0
    files_top: int = 0
    focused_panel: Panel = Panel.REMOTES
    modal: Modal | None = None
    pending_delete: str | None = None
    running: bool = True
    connected: bool = True
    message: str = ""

    def report(self, message: str) -> None:
        self.message = message
        self.connected = True

    def report_error(self, message: str, *, unreachable: bool = False) -> None:
        self.message = message
        if unreachable:
            self.connected = False

    def selected_remote(self) -> str | None:
        if not self.remotes:
            return None
        return self.remotes[self.remotes_selected]

    def selected_file(self) -> FileItem | None:
        if not self.files:
            return None
        return self.files[self.files_selected]

    @property
    def display_path(self) -> str:
        if self.current_remote is None:
            return "Select a remote"
        return f"{self.current_remote}:{self.current_path}"
