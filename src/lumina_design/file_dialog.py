"""Native Linux file picker used for photo uploads."""

from __future__ import annotations

import asyncio
import logging
import shutil
from collections.abc import Iterable

LOGGER = logging.getLogger(__name__)

DIALOG_TIMEOUT_SECONDS = 120


def build_dialog_commands(
    title: str, patterns: Iterable[str]
) -> list[list[str]]:
    """Return picker command lines for every backend installed, best first."""
    patterns = list(patterns)
    commands: list[list[str]] = []
    zenity_bin = shutil.which("zenity")
    if zenity_bin is not None:
        cmd = [zenity_bin, "--file-selection", f"--title={title}"]
        if patterns:
            cmd.append(f"--file-filter=Images | {' '.join(patterns)}")
        commands.append(cmd)
    kdialog_bin = shutil.which("kdialog")
    if kdialog_bin is not None:
        commands.append(
            [kdialog_bin, "--getopenfilename", ".", " ".join(patterns), "--title", title]
        )
    return commands


async def _run_picker(cmd: list[str]) -> str | None:
    proc = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, _ = await asyncio.wait_for(
            proc.communicate(), timeout=DIALOG_TIMEOUT_SECONDS
        )
    except asyncio.TimeoutError:
        proc.kill()
        raise
    if proc.returncode != 0:
        return None
    path = stdout.decode().strip()
    return path or None


async def open_native_file_dialog(
    title: str = "Open photo",
    patterns: Iterable[str] = (),
) -> tuple[bool, str | None]:
    """Ask a native picker for a file.

    Returns ``(available, path)``. ``available`` is False when no backend
    could be launched, so the caller can fall back to an in-app prompt;
    ``path`` is None when the user cancelled.
    """
    for cmd in build_dialog_commands(title, patterns):
        try:
            return True, await _run_picker(cmd)
        except (asyncio.TimeoutError, OSError) as exc:
            LOGGER.debug(
                "upload.dialog.failed",
                extra={"event": "upload.dialog.failed", "backend": cmd[0], "error": str(exc)},
            )
    return False, None
