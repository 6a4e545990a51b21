from dynamodb_eventstore.obs.trace import TraceBus


def test_multiple_subscribers_receive_each_message():
    bus = TraceBus()
    a, b = [], []
    bus.subscribe(a.append)
    bus.subscribe(b.append)
    bus.emit("ok 1")
    assert a == ["ok 1"]
    assert b == ["ok 1"]


def test_unsubscribe_is_idempotent():
    bus = TraceBus()
    seen = []
    sub = bus.subscribe(seen.append)
    sub.unsubscribe()
    sub.unsubscribe()
    bus.emit("put 1 {}")
    assert seen == []
    assert len(bus) == 0


def test_subscription_as_context_manager():
    bus = TraceBus()
    seen = []
    with bus.subscribe(seen.append):
        bus.emit("first")
    bus.emit("second")
    assert seen == ["first"]


def test_handler_can_unsubscribe_while_emitting():
    bus = TraceBus()
    seen = []
    holder = {}

    def once(message):
        seen.append(message)
        holder["sub"].unsubscribe()

    holder["sub"] = bus.subscribe(once)
    bus.emit("a")
    bus.emit("b")
    assert seen == ["a"]


def test_raising_handler_does_not_starve_later_subscribers():
    bus = TraceBus()
    seen = []

    def broken(message):
        raise RuntimeError("sink unavailable")

    bus.subscribe(broken)
    bus.subscribe(seen.append)
    bus.emit("ok 1")
    assert seen == ["ok 1"]
    assert len(bus) == 2
