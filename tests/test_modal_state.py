import unittest

from lazyfile.models import (
    AppState,
    ConfirmChoice,
    ConfirmModal,
    FileItem,
    FormField,
    FormMode,
    RemoteFormModal,
)


class TestConfirmModal(unittest.TestCase):
    def test_defaults_to_no(self) -> None:
        modal = ConfirmModal("Delete Remote", "Delete 'gdrive'?")
        self.assertEqual(modal.choice, ConfirmChoice.NO)
        self.assertFalse(modal.is_confirmed())

    def test_toggle_is_involutive(self) -> None:
        modal = ConfirmModal("t", "m")
        for start in (ConfirmChoice.NO, ConfirmChoice.YES):
            modal.choice = start
            modal.toggle()
            self.assertNotEqual(modal.choice, start)
            modal.toggle()
            self.assertEqual(modal.choice, start)

    def test_choose_is_idempotent(self) -> None:
        modal = ConfirmModal("t", "m")
        modal.choose(False)
        self.assertEqual(modal.choice, ConfirmChoice.NO)
        modal.choose(True)
        modal.choose(True)
        self.assertEqual(modal.choice, ConfirmChoice.YES)


class TestRemoteFormModal(unittest.TestCase):
    def test_new_create_form(self) -> None:
        modal = RemoteFormModal(FormMode.CREATE)
        self.assertEqual(modal.name, "")
        self.assertEqual(modal.remote_type, "local")
        self.assertEqual(modal.path, "")
        self.assertEqual(modal.focus_field, FormField.NAME)
        self.assertIsNone(modal.error)
        self.assertEqual(modal.title, "Create Remote")
        self.assertEqual(RemoteFormModal(FormMode.EDIT).title, "Edit Remote")

    def test_next_field_has_period_three(self) -> None:
        modal = RemoteFormModal(FormMode.CREATE)
        seen = []
        for _ in range(3):
            modal.next_field()
            seen.append(modal.focus_field)
        self.assertEqual(seen, [FormField.TYPE, FormField.PATH, FormField.NAME])

    def test_prev_field_inverts_next_field(self) -> None:
        modal = RemoteFormModal(FormMode.CREATE)
        for start in (FormField.NAME, FormField.TYPE, FormField.PATH):
            modal.focus_field = start
            modal.next_field()
            modal.prev_field()
            self.assertEqual(modal.focus_field, start)

    def test_input_goes_to_focused_field_and_clears_error(self) -> None:
        modal = RemoteFormModal(FormMode.CREATE, error="Name and Type are required")
        for ch in "box":
            modal.input_char(ch)
        modal.focus_field = FormField.TYPE
        modal.remote_type = ""
        modal.input_char("s")
        modal.input_char("3")
        modal.focus_field = FormField.PATH
        modal.input_char("/")

        self.assertEqual((modal.name, modal.remote_type, modal.path), ("box", "s3", "/"))
        self.assertIsNone(modal.error)

    def test_backspace(self) -> None:
        modal = RemoteFormModal(FormMode.CREATE, name="test", error="x")
        modal.backspace()
        self.assertEqual(modal.name, "tes")
        self.assertIsNone(modal.error)

        empty = RemoteFormModal(FormMode.CREATE)
        empty.backspace()
        self.assertEqual(empty.name, "")

    def test_is_valid_needs_name_and_type(self) -> None:
        modal = RemoteFormModal(FormMode.CREATE)
        self.assertFalse(modal.is_valid())
        modal.name = "myremote"
        self.assertTrue(modal.is_valid())
        modal.remote_type = ""
        self.assertFalse(modal.is_valid())

    def test_parameters_only_carry_a_set_path(self) -> None:
        self.assertEqual(RemoteFormModal(FormMode.CREATE, name="a").parameters(), {})
        self.assertEqual(RemoteFormModal(FormMode.CREATE, name="a", path="/data").parameters(), {"path": "/data"})


class TestAppState(unittest.TestCase):
    def test_initial_state(self) -> None:
        state = AppState()
        self.assertEqual(state.remotes, [])
        self.assertIsNone(state.current_remote)
        self.assertEqual(state.current_path, "")
        self.assertIsNone(state.modal)
        self.assertIsNone(state.pending_delete)
        self.assertTrue(state.running)
        self.assertIsNone(state.selected_remote())
        self.assertIsNone(state.selected_file())

    def test_display_path(self) -> None:
        state = AppState()
        self.assertEqual(state.display_path, "Select a remote")
        state.current_remote = "gdrive"
        self.assertEqual(state.display_path, "gdrive:")
        state.current_path = "/docs"
        self.assertEqual(state.display_path, "gdrive:/docs")

    def test_report_error_marks_disconnected_only_when_unreachable(self) -> None:
        state = AppState()
        state.report_error("Error: bad")
        self.assertTrue(state.connected)
        state.report_error("Error: down", unreachable=True)
        self.assertFalse(state.connected)
        self.assertEqual(state.message, "Error: down")
        state.report("ok")
        self.assertTrue(state.connected)

    def test_selected_file(self) -> None:
        state = AppState(files=[FileItem("a", 1, "", False), FileItem("b", 0, "", True)], files_selected=1)
        selected = state.selected_file()
        assert selected is not None
        self.assertEqual(selected.name, "b")


if __name__ == "__main__":
    unittest.main()
