"""Convenience layer that turns console ui calls into effects.

Every method builds an effect tagged with its own name as ``caller`` and
dispatches it through the EffectCenter, so code calling these methods never
touches a ConsoleSurface directly.
"""

from collections.abc import Mapping
from typing import Any

from effectcenter.apps.console.surface import ConsoleSurface, ToastAlignment, ToastType
from effectcenter.core.center import EffectCenter
from effectcenter.core.effect import RequestEffect, SendEffect, build_debug_properties
from effectcenter.core.outcome import Outcome


class ConsoleEffects:
    """Shows console dialogs, toasts and banners from anywhere.

    Args:
        center: The EffectCenter to dispatch through. Defaults to the
            process-wide instance.
    """

    def __init__(self, center: EffectCenter | None = None) -> None:
        self._center = center

    @property
    def center(self) -> EffectCenter:
        return self._center or EffectCenter.instance()

    def show_dialog(
        self,
        prompt: str,
        choices: Mapping[str, Any],
        result_type: Any = object,
        debug_properties: Mapping[str, Any] | None = None,
    ) -> Outcome:
        """Ask the user to pick one of ``choices``.

        Returns an outcome that settles with the chosen value, or None when
        the dialog was dismissed.
        """

        async def callback(surface: ConsoleSurface) -> Any:
            return await surface.ask(prompt, choices)

        return self.center.request(
            RequestEffect[result_type](
                callback=callback,
                debug_properties=build_debug_properties(
                    "show_dialog",
                    {"prompt": prompt, "choices": dict(choices)},
                    debug_properties,
                ),
            )
        )

    def show_toast(
        self,
        message: str,
        toast_type: ToastType = ToastType.NEUTRAL,
        alignment: ToastAlignment | None = None,
        debug_properties: Mapping[str, Any] | None = None,
    ) -> None:
        self.center.send(
            SendEffect(
                callback=lambda surface: surface.toast(message, toast_type, alignment),
                debug_properties=build_debug_properties(
                    "show_toast",
                    {"message": message, "toast_type": toast_type, "alignment": alignment},
                    debug_properties,
                ),
            )
        )

    def show_banner(
        self,
        text: str,
        debug_properties: Mapping[str, Any] | None = None,
    ) -> None:
        self.center.send(
            SendEffect(
                callback=lambda surface: surface.banner(text),
                debug_properties=build_debug_properties(
                    "show_banner", {"text": text}, debug_properties
                ),
            )
        )
