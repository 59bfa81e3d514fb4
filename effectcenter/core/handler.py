"""Handler base class for effectcenter."""

from abc import ABC, abstractmethod
from typing import Any

from effectcenter.core.effect import RequestEffect, SendEffect


class Handler(ABC):
    """Base class for components that consume effects.

    A Handler is what the EffectCenter forwards effects to. The production
    implementation renders them with a live render context; the inspectable
    implementation records them for tests instead.

    Both entry points are synchronous. They may start asyncio work, but must
    return without waiting for the effect to finish.

    Note: Registration with the EffectCenter is managed by whoever owns the
    handler. The center never disposes a handler when it is deregistered.
    """

    def __init__(self, name: str | None = None) -> None:
        """Initialize the Handler.

        Args:
            name: Optional name for the handler. Defaults to the class name.
        """
        self.name = name or self.__class__.__name__

    @abstractmethod
    def request(self, effect: RequestEffect[Any]) -> None:
        """Consume an awaitable effect.

        Implementations must eventually settle ``effect.outcome`` exactly once,
        with a value or an error.

        Args:
            effect: The effect to handle.
        """
        ...

    @abstractmethod
    def send(self, effect: SendEffect) -> None:
        """Consume a fire-and-forget effect.

        Args:
            effect: The effect to handle.
        """
        ...

    @abstractmethod
    def dispose(self) -> None:
        """Release resources held by the handler. Safe to call repeatedly."""
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class HandlerDisposedError(RuntimeError):
    """Settled into outcomes whose pending work was cancelled by dispose()."""

    pass
