"""Production handler that shows effects with a live render context."""

import asyncio
import inspect
from collections.abc import Awaitable
from typing import Any

from effectcenter.core.center import EffectCenter
from effectcenter.core.effect import RequestEffect, SendEffect
from effectcenter.core.handler import Handler, HandlerDisposedError
from effectcenter.core.logging import effect_extra, get_logger


class ContextHandler(Handler):
    """Handler that invokes effect callbacks with a render context.

    The owner of the render context creates a ContextHandler and mounts it
    while the context is live, typically as a context manager:

        with ContextHandler(surface):
            await app.run()

    Callbacks may return a plain value or an awaitable. Awaitables are
    awaited in a task on the running event loop, so ``request`` and ``send``
    always return immediately.

    Args:
        context: The render context passed to every effect callback.
        center: The EffectCenter to register with. Defaults to the
            process-wide instance.
        name: Optional handler name. Defaults to the class name.
    """

    def __init__(
        self,
        context: Any,
        center: EffectCenter | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(name=name)
        self.context = context
        self._center = center
        self._mounted = False
        self._disposed = False
        self._pending: dict[asyncio.Task, RequestEffect[Any] | None] = {}
        self._log = get_logger("effectcenter.handlers")

    @property
    def center(self) -> EffectCenter:
        return self._center or EffectCenter.instance()

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        """Register with the center. Effects start arriving after this call.

        A handler disposed by an earlier unmount can be mounted again.
        """
        self.center.register_handler(self)
        self._mounted = True
        self._disposed = False

    def unmount(self) -> None:
        """Deregister from the center and dispose the handler."""
        # reset() on the center may already have deregistered us
        if self._mounted and self.center.is_registered(self):
            self.center.deregister_handler(self)
        self._mounted = False
        self.dispose()

    def __enter__(self) -> "ContextHandler":
        self.mount()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.unmount()

    def request(self, effect: RequestEffect[Any]) -> None:
        try:
            result = effect.callback(self.context)
        except Exception as e:
            effect.settle_error(e)
            return

        if not inspect.isawaitable(result):
            effect.settle(result)
            return

        try:
            self._schedule(self._settle_from(effect, result), effect)
        except RuntimeError as e:
            _close(result)
            effect.settle_error(e)

    def send(self, effect: SendEffect) -> None:
        result = effect.callback(self.context)
        if inspect.isawaitable(result):
            try:
                task = self._schedule(_await(result), None)
            except RuntimeError:
                _close(result)
                raise
            task.add_done_callback(lambda t: self._log_send_failure(t, effect))

    def dispose(self) -> None:
        """Cancel pending callback work, settling affected outcomes with an error."""
        if self._disposed:
            return
        self._disposed = True
        for task, effect in list(self._pending.items()):
            task.cancel()
            if effect is not None and not effect.outcome.done():
                effect.settle_error(
                    HandlerDisposedError(f"{self.name} was disposed before {effect} completed")
                )
        self._pending.clear()

    def _schedule(self, coro: Any, effect: RequestEffect[Any] | None) -> asyncio.Task:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise RuntimeError(
                f"{self.name} needs a running event loop to await effect callbacks"
            ) from None
        task = loop.create_task(coro)
        self._pending[task] = effect
        task.add_done_callback(lambda t: self._pending.pop(t, None))
        return task

    async def _settle_from(self, effect: RequestEffect[Any], awaitable: Awaitable[Any]) -> None:
        try:
            value = await awaitable
        except Exception as e:
            error: BaseException | None = e
        else:
            error = None

        # dispose() may have settled the outcome while we were waiting
        if effect.outcome.done():
            return
        if error is not None:
            effect.settle_error(error)
        else:
            effect.settle(value)

    def _log_send_failure(self, task: asyncio.Task, effect: SendEffect) -> None:
        if task.cancelled() or task.exception() is None:
            return
        error = task.exception()
        self._log.error(
            f"Send callback raised exception: {error}",
            extra={**effect_extra(effect, self), "error": str(error)},
        )


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


def _close(awaitable: Any) -> None:
    if inspect.iscoroutine(awaitable):
        awaitable.close()
