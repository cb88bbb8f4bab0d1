"""Tests for native file picker command selection."""

from __future__ import annotations

import unittest
from unittest.mock import AsyncMock, patch

from lumina_design import file_dialog


def _which(available: set[str]):
    return lambda name: f"/usr/bin/{name}" if name in available else None


class BuildDialogCommandsTests(unittest.TestCase):
    """Validate backend discovery order."""

    def test_no_backends(self) -> None:
        with patch("lumina_design.file_dialog.shutil.which", side_effect=_which(set())):
            self.assertEqual(file_dialog.build_dialog_commands("Pick", ["*.png"]), [])

    def test_zenity_preferred_over_kdialog(self) -> None:
        with patch(
            "lumina_design.file_dialog.shutil.which",
            side_effect=_which({"zenity", "kdialog"}),
        ):
            commands = file_dialog.build_dialog_commands("Pick", ["*.png", "*.jpg"])
        self.assertEqual(commands[0][0], "/usr/bin/zenity")
        self.assertIn("--file-filter=Images | *.png *.jpg", commands[0])
        self.assertEqual(commands[1][0], "/usr/bin/kdialog")


class OpenNativeFileDialogTests(unittest.IsolatedAsyncioTestCase):
    """Validate fallback signalling."""

    async def test_unavailable_when_no_backend(self) -> None:
        with patch("lumina_design.file_dialog.shutil.which", side_effect=_which(set())):
            self.assertEqual(await file_dialog.open_native_file_dialog(), (False, None))

    async def test_selected_path_returned(self) -> None:
        with patch(
            "lumina_design.file_dialog.shutil.which", side_effect=_which({"zenity"})
        ), patch(
            "lumina_design.file_dialog._run_picker",
            new=AsyncMock(return_value="/home/me/room.jpg"),
        ):
            result = await file_dialog.open_native_file_dialog()
        self.assertEqual(result, (True, "/home/me/room.jpg"))

    async def test_failed_backend_falls_through(self) -> None:
        picker = AsyncMock(side_effect=[OSError("no display"), None])
        with patch(
            "lumina_design.file_dialog.shutil.which",
            side_effect=_which({"zenity", "kdialog"}),
        ), patch("lumina_design.file_dialog._run_picker", new=picker):
            result = await file_dialog.open_native_file_dialog()
        self.assertEqual(result, (True, None))
        self.assertEqual(picker.await_count, 2)


if __name__ == "__main__":
    unittest.main()
