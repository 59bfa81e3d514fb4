"""Handler that records effects for tests instead of rendering them."""

import asyncio
import inspect
from collections.abc import Callable
from dataclasses import dataclass
from types import UnionType
from typing import Any, Union, get_args, get_origin

from effectcenter.core.center import EffectCenter
from effectcenter.core.effect import RequestEffect, SendEffect
from effectcenter.core.handler import Handler, HandlerDisposedError
from effectcenter.handlers.stream import EffectStream

RequestMatcher = Callable[[RequestEffect[Any]], bool]


class UnmatchedRequestError(LookupError):
    """Settled into a request that no stubbed answer matched."""

    def __init__(self, effect: RequestEffect[Any]):
        self.effect = effect
        super().__init__(f"No stubbed request matched: {effect}")


@dataclass
class _MatchJob:
    result_type: Any
    answer: Any
    matcher: RequestMatcher | None = None

    def accepts(self, effect: RequestEffect[Any]) -> bool:
        if not _is_subtype(self.result_type, effect.result_type):
            return False
        return self.matcher is None or bool(self.matcher(effect))


def _is_subtype(job_type: Any, effect_type: Any) -> bool:
    """Return True if answers of ``job_type`` can satisfy a request for ``effect_type``.

    Unions on either side are checked member by member, and parametrised
    generics such as ``list[int]`` compare by their origin class.
    """
    if effect_type is object or effect_type is Any or job_type == effect_type:
        return True
    if _is_union(job_type):
        return all(_is_subtype(member, effect_type) for member in get_args(job_type))
    if _is_union(effect_type):
        return any(_is_subtype(job_type, member) for member in get_args(effect_type))
    job_class = get_origin(job_type) or job_type
    effect_class = get_origin(effect_type) or effect_type
    if effect_class is not effect_type and job_class is not job_type:
        # both parametrised: arguments must line up as well
        if get_args(job_type) != get_args(effect_type):
            return False
    elif effect_class is not effect_type:
        return False
    if isinstance(job_class, type) and isinstance(effect_class, type):
        return issubclass(job_class, effect_class)
    return False


def _is_union(tp: Any) -> bool:
    return get_origin(tp) in (Union, UnionType)


class InspectableHandler(Handler):
    """Handler for tests that records effects rather than rendering them.

    Send effects are appended to :attr:`sends`. Request effects are answered
    from stubs registered with :meth:`stub_request` and then appended to
    :attr:`requests`; a request that no stub matches settles with
    UnmatchedRequestError instead of hanging.

    Create a fresh handler per test and dispose it afterwards:

        handler = InspectableHandler()
        handler.stub_request(bool, True)

        assert await center.request(effect) is True
        recorded = await handler.requests.next()
        assert recorded.caller == "show_dialog"

        handler.dispose()

    Args:
        center: The EffectCenter to register with. Defaults to the
            process-wide instance.
        register: Register with the center on construction. Defaults to True.
        name: Optional handler name. Defaults to the class name.
    """

    def __init__(
        self,
        center: EffectCenter | None = None,
        register: bool = True,
        name: str | None = None,
    ) -> None:
        super().__init__(name=name)
        self._center = center or EffectCenter.instance()
        self._requests: EffectStream[RequestEffect[Any]] = EffectStream("requests")
        self._sends: EffectStream[SendEffect] = EffectStream("sends")
        self._jobs: list[_MatchJob] = []
        self._pending: dict[asyncio.Task, RequestEffect[Any]] = {}
        self._disposed = False
        if register:
            self._center.register_handler(self)

    @property
    def requests(self) -> EffectStream[RequestEffect[Any]]:
        """Every request effect received, in arrival order."""
        return self._requests

    @property
    def sends(self) -> EffectStream[SendEffect]:
        """Every send effect received, in arrival order."""
        return self._sends

    @property
    def disposed(self) -> bool:
        return self._disposed

    def stub_request(
        self,
        result_type: Any,
        answer: Any,
        matcher: RequestMatcher | None = None,
    ) -> None:
        """Answer future requests declaring ``result_type`` with ``answer``.

        Stubs are consulted in the order they were added and the first match
        wins. They are never removed, so register them in the order they
        should be consulted.

        Args:
            result_type: The type argument the request must declare, e.g. ``bool``
                for ``RequestEffect[bool]``. Subclasses also satisfy requests
                for their base types.
            answer: The value to settle with, or an awaitable resolving to it.
            matcher: Optional predicate on the request effect, usually
                inspecting its ``debug_properties``.
        """
        self._jobs.append(_MatchJob(result_type=result_type, answer=answer, matcher=matcher))

    def request(self, effect: RequestEffect[Any]) -> None:
        try:
            job = next((job for job in self._jobs if job.accepts(effect)), None)
        except Exception as e:
            effect.settle_error(e)
            self._record(effect)
            return

        if job is None:
            effect.settle_error(UnmatchedRequestError(effect))
        elif inspect.isawaitable(job.answer):
            self._answer_later(job, effect)
            return
        else:
            effect.settle(job.answer)
        self._record(effect)

    def send(self, effect: SendEffect) -> None:
        self._sends.append(effect)

    def dispose(self) -> None:
        """Close both streams, drop stubs and deregister from the center."""
        if self._disposed:
            return
        self._disposed = True
        for task, effect in list(self._pending.items()):
            task.cancel()
            if not effect.outcome.done():
                effect.settle_error(
                    HandlerDisposedError(f"{self.name} was disposed before {effect} was answered")
                )
        self._pending.clear()
        self._requests.close()
        self._sends.close()
        self._jobs.clear()
        if self._center.is_registered(self):
            self._center.deregister_handler(self)

    def _answer_later(self, job: _MatchJob, effect: RequestEffect[Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            effect.settle_error(
                RuntimeError(f"{self.name} needs a running event loop to await stubbed answers")
            )
            self._record(effect)
            return

        # A coroutine can only be awaited once, so share it as a future between matches
        if inspect.iscoroutine(job.answer):
            job.answer = asyncio.ensure_future(job.answer)
        task = loop.create_task(self._settle_from(job.answer, effect))
        self._pending[task] = effect
        task.add_done_callback(lambda t: self._pending.pop(t, None))

    async def _settle_from(self, answer: Any, effect: RequestEffect[Any]) -> None:
        try:
            value = await answer
        except Exception as e:
            effect.settle_error(e)
        else:
            effect.settle(value)
        self._record(effect)

    def _record(self, effect: RequestEffect[Any]) -> None:
        if not self._requests.closed:
            self._requests.append(effect)
