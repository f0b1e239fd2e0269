from __future__ import annotations

import logging

from floatwm.config.settings import load_settings
from floatwm.core.host import VirtualHost
from floatwm.core.manager import SurfaceManager, WMEvent
from floatwm.core.surface import SurfaceOptions
from floatwm.geometry.rect import Rect


def _options(title: str = "Win", **kwargs) -> SurfaceOptions:
    kwargs.setdefault("content", object())
    return SurfaceOptions(title=title, **kwargs)


def test_open_mounts_and_focuses(wm, host) -> None:
    surface = wm.open(_options())
    assert surface is not None
    assert wm.surfaces == [surface]
    assert host.mounted == [surface]
    assert wm.focused is surface
    assert surface.focused
    assert surface.z_index == 101
    assert host.frame(surface).z_index == 101


def test_open_fires_caller_focus(wm, recorder) -> None:
    wm.open(recorder.options())
    assert recorder.calls == ["focus"]


def test_z_order_is_strictly_increasing(wm) -> None:
    a = wm.open(_options("a"))
    b = wm.open(_options("b"))
    c = wm.open(_options("c"))
    assigned = [a.z_index, b.z_index, c.z_index]
    for target in (a, c, a, b, b):
        wm.focus(target)
        assigned.append(target.z_index)
    assert assigned == sorted(assigned)
    assert len(set(assigned)) == len(assigned)
    assert wm.highest_z == assigned[-1]


def test_focus_is_exclusive(wm) -> None:
    a = wm.open(_options("a"))
    b = wm.open(_options("b"))
    assert b.focused and not a.focused
    wm.focus(a)
    assert a.focused and not b.focused
    assert wm.focused is a
    assert a.z_index > b.z_index


def test_initial_z_from_settings() -> None:
    wm = SurfaceManager(VirtualHost(), settings=load_settings({"initial_z": 0}))
    surface = wm.open(_options())
    assert surface.z_index == 1


def test_close_removes_and_calls_caller(wm, recorder) -> None:
    a = wm.open(recorder.options(title="a"))
    b = wm.open(_options("b"))
    a.close()
    assert wm.surfaces == [b]
    assert recorder.count("close") == 1


def test_closing_focused_clears_focus(wm) -> None:
    surface = wm.open(_options())
    surface.close()
    assert wm.focused is None
    assert wm.count == 0


def test_close_all(wm, host) -> None:
    closed: list[str] = []
    for title in ("a", "b", "c"):
        wm.open(_options(title, on_close=lambda t=title: closed.append(t)))
    wm.close_all()
    assert closed == ["a", "b", "c"]
    assert wm.count == 0
    assert host.mounted == []
    assert host.subscription_count == 1


def test_close_all_closes_surface_opened_during_teardown(wm, host) -> None:
    reopened: list = []

    def _reopen() -> None:
        if not reopened:
            reopened.append(wm.open(_options("reopened")))

    wm.open(_options("a", on_close=_reopen))
    wm.open(_options("b"))
    wm.close_all()

    assert reopened[0] is not None
    assert reopened[0].is_closed
    assert wm.count == 0
    assert host.mounted == []
    assert host.subscription_count == 1


def test_close_all_when_empty(wm) -> None:
    wm.close_all()
    wm.close_all()
    assert wm.count == 0


def test_z_counter_survives_close(wm) -> None:
    a = wm.open(_options("a"))
    z = a.z_index
    a.close()
    b = wm.open(_options("b"))
    assert b.z_index > z


def test_open_without_host_is_noop(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="floatwm.core.manager"):
        wm = SurfaceManager(None)
        assert wm.open(_options()) is None
    assert wm.count == 0
    assert "no host" in caplog.text


def test_open_without_content_is_noop(wm, host) -> None:
    assert wm.open(SurfaceOptions(title="Empty", content=None)) is None
    assert wm.count == 0
    assert host.mounted == []


def test_focus_unknown_surface_is_noop(wm) -> None:
    a = wm.open(_options("a"))
    z = wm.highest_z
    a.close()
    assert wm.focus(a) is False
    assert wm.focus(None) is False
    assert wm.highest_z == z


def test_press_routes_to_topmost(wm, host) -> None:
    below = wm.open(_options("below", x=100, y=100))
    above = wm.open(_options("above", x=300, y=200))
    # (500, 300) is inside both; 'above' was opened last
    assert wm.topmost_at(500, 300) is above

    wm.focus(below)
    assert wm.topmost_at(500, 300) is below
    host.press(500, 300)
    host.release(500, 300)
    assert wm.focused is below

    # A point only 'above' covers raises it
    host.press(850, 550)
    host.release(850, 550)
    assert wm.focused is above


def test_press_on_empty_desktop_changes_nothing(wm, host) -> None:
    surface = wm.open(_options(x=100, y=100))
    z = surface.z_index
    host.press(1000, 700)
    host.release(1000, 700)
    assert surface.z_index == z


def test_drag_only_moves_pressed_surface(wm, host) -> None:
    a = wm.open(_options("a", x=0, y=300))
    b = wm.open(_options("b", x=640, y=300))
    host.drag([(150, 310), (200, 350)])
    assert a.geometry == Rect(50, 340, 600, 400)
    assert b.geometry == Rect(640, 300, 600, 400)


def test_events_are_emitted(wm) -> None:
    seen: list[tuple[WMEvent, str]] = []
    wm.on_all(lambda event, surface, manager: seen.append((event, surface.title)))
    surface = wm.open(_options("a", x=100, y=100))
    surface.toggle_maximize()
    surface.close()
    assert seen == [
        (WMEvent.SURFACE_OPENED, "a"),
        (WMEvent.FOCUS_CHANGED, "a"),
        (WMEvent.GEOMETRY_CHANGED, "a"),
        (WMEvent.SURFACE_CLOSED, "a"),
    ]


def test_off_unsubscribes(wm) -> None:
    seen: list[WMEvent] = []

    def _cb(event, surface, manager) -> None:
        seen.append(event)

    wm.on(WMEvent.SURFACE_OPENED, _cb)
    wm.off(WMEvent.SURFACE_OPENED, _cb)
    wm.off(WMEvent.SURFACE_OPENED, _cb)
    wm.open(_options())
    assert seen == []


def test_subscriber_error_is_logged(wm, caplog) -> None:
    def _boom(event, surface, manager) -> None:
        raise RuntimeError("boom")

    wm.on(WMEvent.SURFACE_OPENED, _boom)
    with caplog.at_level(logging.ERROR, logger="floatwm.core.manager"):
        surface = wm.open(_options())
    assert surface is not None
    assert wm.focused is surface
    assert "surface_opened" in caplog.text


def test_caller_callback_runs_after_bookkeeping(wm) -> None:
    observed: list[int] = []

    def _on_close() -> None:
        observed.append(wm.count)

    surface = wm.open(_options(on_close=_on_close))
    surface.close()
    assert observed == [0]


def test_shutdown_releases_routing(wm, host) -> None:
    wm.open(_options())
    wm.shutdown()
    assert host.subscription_count == 0
    assert wm.count == 0


def test_dump_state(wm) -> None:
    wm.open(_options("first"))
    wm.open(_options("second"))
    dump = wm.dump_state()
    assert "2 surfaces" in dump
    lines = dump.splitlines()
    assert lines[4].startswith(" >> ") and "second" in lines[4]
    assert "first" in lines[5]


def test_get_by_id(wm) -> None:
    a = wm.open(_options("a"))
    b = wm.open(_options("b"))
    assert wm.get(a.id) is a
    assert wm.get(b.id) is b
    a.close()
    assert wm.get(a.id) is None
