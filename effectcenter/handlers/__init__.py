"""Handler implementations that consume dispatched effects."""

from effectcenter.handlers.context import ContextHandler
from effectcenter.handlers.inspectable import InspectableHandler, UnmatchedRequestError
from effectcenter.handlers.stream import EffectCursor, EffectStream, StreamClosedError

__all__ = [
    "ContextHandler",
    "InspectableHandler",
    "UnmatchedRequestError",
    "EffectStream",
    "EffectCursor",
    "StreamClosedError",
]
