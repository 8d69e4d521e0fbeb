import logging

import pytest

from specter.core.base import ExampleNode
from specter.core.dispatcher import EventDispatcher
from specter.core.dispatcher import Listener
from specter.core.dispatcher import LoggingListener
from specter.core.dispatcher import MethodCallEvent
from specter.core.events import AFTER_METHOD_CALL
from specter.core.events import BEFORE_METHOD_CALL
from specter.core.events import EventCategory
from specter.core.events import EventSeverity

from conftest import Recorder


class Broken(Listener):
    def __call__(self, name, event):
        raise RuntimeError("listener exploded")


class Target:
    def ping(self):
        return "pong"


@pytest.fixture
def event():
    return MethodCallEvent(ExampleNode("it pings"), Target(), "ping", [1, 2])


@pytest.mark.unit
class TestMethodCallEvent:
    def test_properties(self, event):
        assert event.example.title == "it pings"
        assert isinstance(event.subject, Target)
        assert event.method == "ping"
        assert event.arguments == (1, 2)

    def test_repr(self, event):
        assert repr(event) == (
            f"MethodCallEvent(subject='{__name__}.Target', method='ping', "
            "arguments=(1, 2))"
        )


@pytest.mark.unit
class TestListener:
    def test_defaults(self):
        recorder = Recorder()
        assert recorder.name == "Recorder"
        assert recorder.events == set()
        assert recorder.active is True

    def test_observes_everything_by_default(self):
        recorder = Recorder()
        assert recorder.observes(BEFORE_METHOD_CALL)
        assert recorder.observes(AFTER_METHOD_CALL)

    def test_observes_selected_events(self):
        recorder = Recorder(events={AFTER_METHOD_CALL})
        assert not recorder.observes(BEFORE_METHOD_CALL)
        assert recorder.observes(AFTER_METHOD_CALL)

    def test_inactive_listener_observes_nothing(self):
        recorder = Recorder()
        recorder.active = False
        assert not recorder.observes(BEFORE_METHOD_CALL)

    def test_cannot_instantiate_abstract_listener(self):
        with pytest.raises(TypeError):
            Listener()


@pytest.mark.unit
class TestEventDispatcher:
    def test_dispatches_in_registration_order(self, event):
        log = []
        dispatcher = EventDispatcher(
            [Recorder(log, name="first"), Recorder(log, name="second")]
        )
        assert dispatcher.dispatch(event, BEFORE_METHOD_CALL) is event
        assert log == [
            (BEFORE_METHOD_CALL, "ping", (1, 2)),
            (BEFORE_METHOD_CALL, "ping", (1, 2)),
        ]

    def test_skips_listeners_not_observing(self, event):
        log = []
        dispatcher = EventDispatcher([Recorder(log, events={AFTER_METHOD_CALL})])
        dispatcher.dispatch(event, BEFORE_METHOD_CALL)
        dispatcher.dispatch(event, AFTER_METHOD_CALL)
        assert log == [(AFTER_METHOD_CALL, "ping", (1, 2))]

    def test_rejects_unknown_event_names(self, event):
        with pytest.raises(ValueError, match="Unknown method call event"):
            EventDispatcher().dispatch(event, "duringMethodCall")

    def test_rejects_non_listeners(self):
        with pytest.raises(TypeError, match="Expected Listener instance"):
            EventDispatcher().add_listener(lambda name, event: None)

    def test_add_and_remove(self):
        recorder = Recorder()
        dispatcher = EventDispatcher()
        dispatcher.add_listener(recorder)
        dispatcher.add_listener(recorder)
        assert dispatcher.listeners == [recorder]
        dispatcher.remove_listener(recorder)
        dispatcher.remove_listener(recorder)
        assert dispatcher.listeners == []

    def test_listeners_is_a_copy(self):
        dispatcher = EventDispatcher([Recorder()])
        dispatcher.listeners.clear()
        assert len(dispatcher.listeners) == 1

    def test_failing_listener_is_audited(self, event, caplog):
        log = []
        dispatcher = EventDispatcher([Broken(), Recorder(log)])
        with caplog.at_level(logging.WARNING, logger="specter"):
            dispatcher.dispatch(event, AFTER_METHOD_CALL)
        assert log == [(AFTER_METHOD_CALL, "ping", (1, 2))]
        assert "Broken" in caplog.text
        (entry,) = dispatcher.audit.get_events(event="listener_error")
        assert entry["listener"] == "Broken"
        assert entry["dispatched"] == AFTER_METHOD_CALL
        assert entry["error"] == "listener exploded"
        assert entry["category"] is EventCategory.ERROR
        assert entry["severity"] is EventSeverity.WARNING

    def test_logging_listener(self, event, caplog):
        dispatcher = EventDispatcher([LoggingListener()])
        with caplog.at_level(logging.DEBUG, logger="specter"):
            dispatcher.dispatch(event, BEFORE_METHOD_CALL)
        assert f"{BEFORE_METHOD_CALL}: {__name__}.Target.ping()" in caplog.text
        assert not dispatcher.audit


@pytest.mark.integration
class TestDispatchThroughCaller:
    def test_listener_failure_does_not_reach_caller(self, wrapper, caplog):
        wrapper.dispatcher.add_listener(Broken())
        target = wrapper.wrap(Target())
        with caplog.at_level(logging.WARNING, logger="specter"):
            assert target.ping().get_wrapped_object() == "pong"
        assert len(wrapper.dispatcher.audit) == 2

    def test_event_carries_the_example(self, wrapper, example):
        seen = []

        class Spy(Listener):
            def __call__(self, name, event):
                seen.append(event.example)

        wrapper.dispatcher.add_listener(Spy())
        wrapper.wrap(Target()).ping()
        assert seen == [example, example]
