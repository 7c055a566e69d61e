from __future__ import annotations

import logging

from cafe_receipt.print_pipeline import PrintSurface, SurfaceUnavailable, print_receipt


class FakeSurface(PrintSurface):
    def __init__(self, ready_signal=False, fail_open=False, fail_print=False):
        self.ready_signal = ready_signal
        self.fail_open = fail_open
        self.fail_print = fail_print
        self.ready_callback = None
        self.documents = []
        self.events = []

    def open(self):
        self.events.append("open")
        if self.fail_open:
            raise SurfaceUnavailable("no document")

    def write(self, document):
        self.events.append("write")
        self.documents.append(document)

    def on_ready(self, callback):
        if not self.ready_signal:
            return False
        self.ready_callback = callback
        return True

    def focus(self):
        self.events.append("focus")

    def print(self):
        self.events.append("print")
        if self.fail_print:
            raise OSError("printer jammed")

    def close(self):
        self.events.append("close")


class FakeScheduler:
    def __init__(self):
        self.pending = []

    def __call__(self, delay, callback):
        self.pending.append((delay, callback))

    def run_next(self):
        delay, callback = self.pending.pop(0)
        callback()
        return delay


def test_prints_immediately_without_ready_signal(latte_order):
    surface = FakeSurface()
    scheduler = FakeScheduler()

    result = print_receipt(latte_order, None, surface_factory=lambda: surface, call_later=scheduler)

    assert result is None
    assert surface.events == ["open", "write", "focus", "print"]
    assert [delay for delay, _ in scheduler.pending] == [1.0]
    scheduler.run_next()
    assert surface.events[-1] == "close"


def test_ready_signal_and_fallback_print_once(latte_order):
    surface = FakeSurface(ready_signal=True)
    scheduler = FakeScheduler()

    print_receipt(latte_order, None, surface_factory=lambda: surface, call_later=scheduler)

    assert "print" not in surface.events
    assert [delay for delay, _ in scheduler.pending] == [0.5]

    surface.ready_callback()
    assert surface.events.count("print") == 1
    assert scheduler.run_next() == 0.5
    assert surface.events.count("print") == 1

    assert [delay for delay, _ in scheduler.pending] == [1.0]
    scheduler.run_next()
    assert surface.events.count("close") == 1


def test_fallback_timer_prints_when_ready_never_fires(latte_order):
    surface = FakeSurface(ready_signal=True)
    scheduler = FakeScheduler()

    print_receipt(latte_order, None, surface_factory=lambda: surface, call_later=scheduler)
    scheduler.run_next()

    assert surface.events.count("print") == 1
    scheduler.run_next()
    assert surface.events[-1] == "close"


def test_unavailable_surface_is_cleaned_up_and_logged(latte_order, caplog):
    surface = FakeSurface(fail_open=True)
    scheduler = FakeScheduler()

    with caplog.at_level(logging.ERROR, logger="cafe_receipt.print_pipeline"):
        print_receipt(latte_order, None, surface_factory=lambda: surface, call_later=scheduler)

    assert surface.events == ["open", "close"]
    assert surface.documents == []
    assert scheduler.pending == []
    assert "Could not open print dialog" in caplog.text


def test_print_failure_is_logged_and_teardown_still_runs(latte_order, caplog):
    surface = FakeSurface(fail_print=True)
    scheduler = FakeScheduler()

    with caplog.at_level(logging.ERROR, logger="cafe_receipt.print_pipeline"):
        print_receipt(latte_order, None, surface_factory=lambda: surface, call_later=scheduler)

    assert "Print error" in caplog.text
    assert [delay for delay, _ in scheduler.pending] == [1.0]
    scheduler.run_next()
    assert surface.events[-1] == "close"


def test_copies_argument_does_not_change_document(latte_order):
    for copies in (1, 2, 5):
        surface = FakeSurface()
        print_receipt(latte_order, None, copies, surface_factory=lambda: surface, call_later=FakeScheduler())
        (document,) = surface.documents
        assert document.count('class="receipt-copy"') == 2
        assert document.count('class="cut-line"') == 1


def test_each_call_gets_its_own_surface(latte_order):
    surfaces = []

    def factory():
        surfaces.append(FakeSurface())
        return surfaces[-1]

    scheduler = FakeScheduler()
    print_receipt(latte_order, None, surface_factory=factory, call_later=scheduler)
    print_receipt(latte_order, None, surface_factory=factory, call_later=scheduler)

    assert len(surfaces) == 2
    while scheduler.pending:
        scheduler.run_next()
    assert all(surface.events.count("close") == 1 for surface in surfaces)
