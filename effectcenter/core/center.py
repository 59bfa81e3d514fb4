"""EffectCenter dispatcher for effectcenter.

The EffectCenter is the single routing point between code that wants a ui
effect shown and the component that can actually show it:
- Handlers register themselves while they hold a live render context
- request()/send() forward each effect to the first registered handler
- Awaitable effects hand their outcome back to the caller

IMPORTANT: The center never renders anything and never disposes handlers.
It only tracks which handlers are registered, in registration order.
"""

import warnings
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from effectcenter.core.effect import RequestEffect, SendEffect
from effectcenter.core.handler import Handler
from effectcenter.core.logging import configure_center_logger, effect_extra
from effectcenter.core.outcome import Outcome


class MissingHandlerMode(Enum):
    """Strategy for dispatching while no handler is registered.

    FAIL: Raise NoHandlerRegisteredError (development builds)
    IGNORE: Resolve requests to None and drop sends (release builds)
    """

    FAIL = "fail"
    IGNORE = "ignore"


# Fail loudly unless running under `python -O`
DEFAULT_MISSING_HANDLER_MODE = MissingHandlerMode.FAIL if __debug__ else MissingHandlerMode.IGNORE


class HandlerRegistrationError(AssertionError):
    """Raised when a handler is registered twice or deregistered while unregistered.

    This indicates a wiring bug in the host application and is not meant to
    be caught.
    """

    def __init__(self, message: str, handler: Handler):
        self.handler = handler
        super().__init__(message)


class NoHandlerRegisteredError(RuntimeError):
    """Raised when an effect is dispatched with no handler registered (FAIL mode)."""

    def __init__(self, effect: RequestEffect[Any] | SendEffect):
        self.effect = effect
        super().__init__(
            f"Attempted to handle {effect} without a handler being registered. "
            "Make sure a handler is mounted for the current page."
        )


class MultipleHandlersWarning(UserWarning):
    """Warned when more than one handler is registered at the same time.

    Only the first registered handler ever receives effects. If running
    several handlers is intended, set
    ``EffectCenter.instance().throw_on_multiple_handlers = False``.
    """

    pass


@dataclass
class CenterStats:
    """Counters describing what an EffectCenter has dispatched."""

    requests_dispatched: int = 0
    sends_dispatched: int = 0
    dropped: int = 0
    registrations: int = 0
    deregistrations: int = 0


class EffectCenter:
    """Central effect dispatcher.

    Use :meth:`instance` for the process-wide center. Separate instances can
    be constructed for isolated setups.
    """

    _instance: ClassVar["EffectCenter | None"] = None

    def __init__(
        self,
        throw_on_multiple_handlers: bool = True,
        missing_handler_mode: MissingHandlerMode = DEFAULT_MISSING_HANDLER_MODE,
    ) -> None:
        self.throw_on_multiple_handlers = throw_on_multiple_handlers
        self.missing_handler_mode = missing_handler_mode
        self._log = configure_center_logger()
        # dict keeps registration order; the first key is the dispatch target
        self._registered: dict[Handler, None] = {}
        self._stats = CenterStats()

    @classmethod
    def instance(cls) -> "EffectCenter":
        """Return the process-wide EffectCenter, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def handlers(self) -> tuple[Handler, ...]:
        """Registered handlers in registration order."""
        return tuple(self._registered)

    @property
    def active_handler(self) -> Handler | None:
        """The handler that receives dispatched effects, if any."""
        return next(iter(self._registered), None)

    def is_registered(self, handler: Handler) -> bool:
        return handler in self._registered

    def get_stats(self) -> CenterStats:
        """Return a copy of current statistics."""
        return CenterStats(
            requests_dispatched=self._stats.requests_dispatched,
            sends_dispatched=self._stats.sends_dispatched,
            dropped=self._stats.dropped,
            registrations=self._stats.registrations,
            deregistrations=self._stats.deregistrations,
        )

    def request(self, effect: RequestEffect[Any]) -> Outcome:
        """Dispatch an awaitable effect to the active handler.

        The handler's ``request`` runs before this method returns. The
        returned outcome settles once the handler finishes the effect.

        Raises:
            NoHandlerRegisteredError: If no handler is registered (FAIL mode).
        """
        handler = self._target_for(effect)
        if handler is None:
            effect.settle(None)
            return effect.outcome

        self._stats.requests_dispatched += 1
        self._log.debug(
            f"Dispatching request to {handler.name}", extra=effect_extra(effect, handler)
        )
        handler.request(effect)
        return effect.outcome

    def send(self, effect: SendEffect) -> None:
        """Dispatch a fire-and-forget effect to the active handler.

        Raises:
            NoHandlerRegisteredError: If no handler is registered (FAIL mode).
        """
        handler = self._target_for(effect)
        if handler is None:
            return

        self._stats.sends_dispatched += 1
        self._log.debug(
            f"Dispatching send to {handler.name}", extra=effect_extra(effect, handler)
        )
        handler.send(effect)

    def _target_for(self, effect: RequestEffect[Any] | SendEffect) -> Handler | None:
        handler = self.active_handler
        if handler is not None:
            return handler

        if self.missing_handler_mode == MissingHandlerMode.FAIL:
            raise NoHandlerRegisteredError(effect)

        self._stats.dropped += 1
        self._log.debug(
            f"No handler registered, dropping {effect.kind} effect",
            extra=effect_extra(effect),
        )
        return None

    def register_handler(self, handler: Handler) -> None:
        """Register a handler with the center.

        Intended to be called by the handler's owner when it starts holding a
        render context, not by application code.

        Raises:
            HandlerRegistrationError: If the handler is already registered.
        """
        if handler in self._registered:
            raise HandlerRegistrationError(
                f"Handler {handler.name} attempted to register itself a second time. "
                "This indicates a wiring error in the code that owns the handler.",
                handler,
            )

        self._registered[handler] = None
        self._stats.registrations += 1
        self._log.debug(
            f"Registered handler {handler.name}",
            extra={"handler": handler.name, "registered_count": len(self._registered)},
        )

        if self.throw_on_multiple_handlers and len(self._registered) > 1:
            self._log.debug(
                f"Multiple handlers registered; only {self.active_handler.name} receives effects",
                extra={"handler": handler.name, "registered_count": len(self._registered)},
            )
            warnings.warn(
                f"{len(self._registered)} effect handlers are registered at the same time. "
                "Effects are only dispatched to the first one. If this is intended, set "
                "EffectCenter.throw_on_multiple_handlers to False.",
                MultipleHandlersWarning,
                stacklevel=2,
            )

    def deregister_handler(self, handler: Handler) -> None:
        """Deregister a handler from the center.

        Does not dispose the handler; that stays with its owner.

        Raises:
            HandlerRegistrationError: If the handler is not registered.
        """
        if handler not in self._registered:
            raise HandlerRegistrationError(
                f"Handler {handler.name} attempted to deregister itself while not registered. "
                "This indicates a wiring error in the code that owns the handler.",
                handler,
            )

        del self._registered[handler]
        self._stats.deregistrations += 1
        self._log.debug(
            f"Deregistered handler {handler.name}",
            extra={"handler": handler.name, "registered_count": len(self._registered)},
        )

    def reset(self) -> None:
        """Deregister every handler, then dispose each of them.

        Meant for test isolation. Statistics are cleared as well.
        """
        handlers = list(self._registered)
        self._registered.clear()
        self._stats = CenterStats()
        for handler in handlers:
            handler.dispose()
