import logging

import pytest

from dbal_adapter.events import EventBeforePayload, EventManager, Events


def test_callable_listener_receives_payload():
    manager = EventManager()
    received = []
    manager.add_event_listener(Events.ON_BEFORE_QUERY, received.append)

    payload = EventBeforePayload("SELECT 1")
    manager.dispatch_event(Events.ON_BEFORE_QUERY, payload)
    manager.dispatch_event(Events.ON_AFTER_QUERY, payload)

    assert received == [payload]


def test_object_listener_method_named_after_event():
    class Audit:
        def __init__(self):
            self.calls = []

        def before_non_query(self, payload):
            self.calls.append(("before", payload.sentence))

        def on_error(self, payload):
            self.calls.append(("error", payload.sentence))

    audit = Audit()
    manager = EventManager()
    manager.add_event_listener([Events.ON_BEFORE_NON_QUERY, Events.ON_ERROR], audit)

    manager.dispatch_event(Events.ON_BEFORE_NON_QUERY, EventBeforePayload("DELETE"))
    manager.dispatch_event(Events.ON_ERROR, EventBeforePayload("DELETE"))

    assert audit.calls == [("before", "DELETE"), ("error", "DELETE")]


def test_subscriber_registration_and_removal():
    class Subscriber:
        def __init__(self):
            self.seen = 0

        def get_subscribed_events(self):
            return [Events.ON_AFTER_QUERY]

        def after_query(self, payload):
            self.seen += 1

    sub = Subscriber()
    manager = EventManager()
    manager.add_event_subscriber(sub)
    assert manager.has_listeners(Events.ON_AFTER_QUERY)

    manager.dispatch_event(Events.ON_AFTER_QUERY)
    manager.remove_event_subscriber(sub)
    manager.dispatch_event(Events.ON_AFTER_QUERY)

    assert sub.seen == 1
    assert not manager.has_listeners(Events.ON_AFTER_QUERY)


def test_same_listener_is_registered_once():
    manager = EventManager()
    received = []
    manager.add_event_listener(Events.ON_ERROR, received.append)
    manager.add_event_listener(Events.ON_ERROR, received.append)
    assert len(manager.get_listeners(Events.ON_ERROR)) == 1


def test_unknown_event_name_is_rejected():
    manager = EventManager()
    with pytest.raises(ValueError):
        manager.add_event_listener("before_query", print)


def test_failing_listener_is_logged_and_others_still_run(caplog):
    manager = EventManager()
    received = []

    def broken(payload):
        raise RuntimeError("listener blew up")

    manager.add_event_listener(Events.ON_AFTER_QUERY, broken)
    manager.add_event_listener(Events.ON_AFTER_QUERY, received.append)

    with caplog.at_level(logging.ERROR, logger="dbal_adapter.events.manager"):
        manager.dispatch_event(Events.ON_AFTER_QUERY, "payload")

    assert received == ["payload"]
    assert "failed for event after-query" in caplog.text
