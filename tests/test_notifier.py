import pytest

from notifier import ChangeNotifier, DataRefresher


def test_publish_calls_every_subscriber():
    notifier = ChangeNotifier()
    calls = []
    notifier.subscribe(lambda: calls.append('a'))
    notifier.subscribe(lambda: calls.append('b'))

    notifier.publish()

    assert sorted(calls) == ['a', 'b']


def test_unsubscribe_stops_delivery_and_is_safe_to_repeat():
    notifier = ChangeNotifier()
    calls = []
    unsubscribe = notifier.subscribe(lambda: calls.append(1))

    unsubscribe()
    unsubscribe()
    notifier.publish()

    assert calls == []
    assert notifier.subscriber_count == 0


def test_failing_subscriber_does_not_block_others():
    notifier = ChangeNotifier()
    calls = []

    def broken():
        raise RuntimeError('boom')

    notifier.subscribe(broken)
    notifier.subscribe(lambda: calls.append(1))

    notifier.publish()

    assert calls == [1]


def test_refresh_applies_freshly_loaded_state():
    applied = []
    refresher = DataRefresher(load=lambda: 'snapshot', apply=applied.append)

    assert refresher.refresh() is True
    assert applied == ['snapshot']
    assert refresher.in_progress is False


def test_reentrant_refresh_is_suppressed():
    notifier = ChangeNotifier()
    loads = []

    def load():
        loads.append(1)
        # Новое изменение приходит, пока идет обновление
        notifier.publish()
        return len(loads)

    applied = []
    refresher = DataRefresher(load=load, apply=applied.append)
    refresher.attach(notifier)

    notifier.publish()

    assert loads == [1]
    assert applied == [1]
    assert refresher.in_progress is False


def test_flag_is_reset_when_load_fails():
    def load():
        raise ValueError('storage unavailable')

    refresher = DataRefresher(load=load, apply=lambda snapshot: None)
    with pytest.raises(ValueError):
        refresher.refresh()

    assert refresher.in_progress is False
