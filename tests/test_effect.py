"""Property-based tests for Effect models."""

import pydantic
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from effectcenter.core.effect import (
    CALLER_KEY,
    RequestEffect,
    SendEffect,
    build_debug_properties,
)
from effectcenter.core.outcome import Outcome

property_keys = st.from_regex(r"[a-z][A-Za-z0-9_]{0,15}", fullmatch=True)
property_values = st.one_of(st.none(), st.booleans(), st.integers(), st.text(max_size=10))
property_maps = st.dictionaries(property_keys, property_values, max_size=8)


def noop(context):
    return None


# For any caller-supplied map, the effect keeps its keys in insertion order
@given(properties=property_maps)
@settings(max_examples=100)
def test_debug_properties_preserve_insertion_order(properties: dict):
    effect = SendEffect(callback=noop, debug_properties=properties)
    assert list(effect.debug_properties) == list(properties)
    assert effect.debug_properties == properties


@given(caller=property_keys, properties=property_maps, overrides=property_maps)
@settings(max_examples=100)
def test_build_debug_properties_puts_caller_first_and_overrides_last(
    caller: str, properties: dict, overrides: dict
):
    result = build_debug_properties(caller, properties, overrides)

    keys = list(result)
    assert keys[0] == CALLER_KEY
    for key, value in overrides.items():
        assert result[key] == value
    for key, value in properties.items():
        if key not in overrides and key != CALLER_KEY:
            assert result[key] == value
    # Keys introduced only by overrides come after the wrapper's own keys
    new_keys = [k for k in overrides if k not in properties and k != CALLER_KEY]
    assert keys[len(keys) - len(new_keys):] == new_keys


def test_dialog_style_properties_keep_documented_order():
    props = build_debug_properties(
        "show_dialog",
        {"dialog": "Placeholder", "barrier_dismissible": True, "barrier_label": None},
        {"custom": object()},
    )
    effect = RequestEffect[bool](callback=noop, debug_properties=props)

    assert list(effect.debug_properties) == [
        "caller",
        "dialog",
        "barrier_dismissible",
        "barrier_label",
        "custom",
    ]
    assert effect.caller == "show_dialog"


def test_override_can_shadow_caller_tag():
    props = build_debug_properties("show_toast", {"message": "hi"}, {"caller": "custom"})
    assert props == {"caller": "custom", "message": "hi"}
    assert list(props)[0] == "caller"


def test_effect_without_caller_has_no_caller():
    effect = SendEffect(callback=noop, debug_properties={"foo": "bar"})
    assert effect.caller is None


def test_debug_property_keys_must_be_strings():
    with pytest.raises(pydantic.ValidationError):
        SendEffect(callback=noop, debug_properties={1: "not a string key"})


def test_any_string_key_is_accepted():
    effect = SendEffect(callback=noop, debug_properties={"": "empty", "  ": "blank"})
    assert list(effect.debug_properties) == ["", "  "]


def test_callback_must_be_callable():
    with pytest.raises(pydantic.ValidationError):
        SendEffect(callback="not callable", debug_properties={})


def test_unknown_fields_are_rejected():
    with pytest.raises(pydantic.ValidationError):
        SendEffect(callback=noop, debug_properties={}, priority="high")


def test_effect_immutability():
    effect = SendEffect(callback=noop, debug_properties={"foo": "bar"})
    with pytest.raises((pydantic.ValidationError, AttributeError, TypeError)):
        effect.debug_properties = {}


def test_request_effect_has_own_pending_outcome():
    first = RequestEffect[int](callback=noop, debug_properties={})
    second = RequestEffect[int](callback=noop, debug_properties={})

    assert isinstance(first.outcome, Outcome)
    assert first.outcome is not second.outcome
    assert not first.outcome.done()


def test_request_effect_settle_forwards_to_outcome():
    effect = RequestEffect[str](callback=noop, debug_properties={})
    effect.settle("answer")
    assert effect.outcome.result() == "answer"


def test_result_type_reports_declared_type():
    assert RequestEffect[bool](callback=noop).result_type is bool
    assert RequestEffect[str](callback=noop).result_type is str
    assert RequestEffect(callback=noop).result_type is object


def test_effects_get_unique_ids():
    ids = {SendEffect(callback=noop).id for _ in range(20)}
    assert len(ids) == 20


def test_kind_identifies_variant():
    assert SendEffect(callback=noop).kind == "send"
    assert RequestEffect[int](callback=noop).kind == "request"


def test_str_lists_properties_in_order():
    effect = RequestEffect[bool](
        callback=noop, debug_properties={"caller": "show_dialog", "barrier_label": None}
    )
    assert str(effect) == "RequestEffect[bool](caller=show_dialog, barrier_label=None)"
    send = SendEffect(callback=noop, debug_properties={"caller": "show_toast"})
    assert str(send) == "SendEffect(caller=show_toast)"
