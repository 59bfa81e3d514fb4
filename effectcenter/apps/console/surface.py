"""Text render context used by the console demo."""

import asyncio
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any


class ToastType(Enum):
    """Kind of toast, which selects its icon."""

    SUCCESS = "success"
    ERROR = "error"
    NEUTRAL = "neutral"


class ToastAlignment(Enum):
    """Where on the surface a toast is placed."""

    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


_TOAST_ICONS = {
    ToastType.SUCCESS: "[ok]",
    ToastType.ERROR: "[!!]",
    ToastType.NEUTRAL: "[i]",
}


class ConsoleSurface:
    """Render context that draws effects as lines of text.

    Args:
        reader: Blocking line reader used for dialogs. Defaults to ``input``.
        writer: Line writer used for all output. Defaults to ``print``.
        default_alignment: Toast alignment used when a toast does not set one.
    """

    def __init__(
        self,
        reader: Callable[[str], str] | None = None,
        writer: Callable[[str], None] | None = None,
        default_alignment: ToastAlignment = ToastAlignment.TOP,
    ) -> None:
        self._reader = reader or input
        self._writer = writer or print
        self.default_alignment = default_alignment

    async def ask(self, prompt: str, choices: Mapping[str, Any]) -> Any:
        """Show a dialog and wait for the user to pick one of ``choices``.

        Args:
            prompt: Question shown to the user.
            choices: Maps the label the user types to the value returned.

        Returns:
            The value of the chosen label, or None if the answer matched no
            label (the dialog was dismissed).
        """
        labels = "/".join(choices)
        answer = await asyncio.to_thread(self._reader, f"{prompt} [{labels}] ")
        answer = answer.strip().lower()
        for label, value in choices.items():
            if label.lower() == answer:
                return value
        return None

    def toast(
        self,
        message: str,
        toast_type: ToastType = ToastType.NEUTRAL,
        alignment: ToastAlignment | None = None,
    ) -> None:
        placement = (alignment or self.default_alignment).value
        self._writer(f"{_TOAST_ICONS[toast_type]} {message} ({placement})")

    def banner(self, text: str) -> None:
        rule = "=" * len(text)
        self._writer(f"{rule}\n{text}\n{rule}")
