"""effectcenter - Show ui effects from anywhere without holding a render context."""

from effectcenter.core import (
    CenterStats,
    Effect,
    EffectCenter,
    Handler,
    HandlerDisposedError,
    HandlerRegistrationError,
    MissingHandlerMode,
    MultipleHandlersWarning,
    NoHandlerRegisteredError,
    Outcome,
    OutcomeAlreadySettledError,
    RequestEffect,
    SendEffect,
    build_debug_properties,
)
from effectcenter.handlers import (
    ContextHandler,
    EffectCursor,
    EffectStream,
    InspectableHandler,
    StreamClosedError,
    UnmatchedRequestError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "Effect",
    "SendEffect",
    "RequestEffect",
    "Outcome",
    "Handler",
    "EffectCenter",
    "CenterStats",
    "build_debug_properties",
    # Failure handling
    "MissingHandlerMode",
    "NoHandlerRegisteredError",
    "HandlerRegistrationError",
    "MultipleHandlersWarning",
    "OutcomeAlreadySettledError",
    "HandlerDisposedError",
    "UnmatchedRequestError",
    # Handlers
    "ContextHandler",
    "InspectableHandler",
    "EffectStream",
    "EffectCursor",
    "StreamClosedError",
    # Meta
    "__version__",
]
