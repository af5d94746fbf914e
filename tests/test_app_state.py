import copy

import pytest

from magsday.constants import SCHEDULES, VIEWS
from magsday.data import repositories
from magsday.state.app_state import AppState
from magsday.sync import LiveSync

from conftest import CountingStore


def test_default_view_is_dashboard():
    assert AppState().view == "dashboard"


@pytest.mark.parametrize("view", VIEWS)
def test_select_known_view(view):
    state = AppState()
    assert state.select_view(view) == view
    assert state.view == view


def test_unknown_view_is_rejected_and_view_kept():
    state = AppState()
    state.select_view("payments")
    with pytest.raises(ValueError):
        state.select_view("reports")
    assert state.view == "payments"


def test_switching_views_touches_neither_backend_nor_mirrors(app_id, today, alice, scope_for):
    store = CountingStore()
    repositories.add_entry(store, scope_for(alice), SCHEDULES, {"title": "Gym"})
    sync = LiveSync(store, app_id, today=today)
    sync.start(alice)
    sync.pump()

    calls_before = list(store.calls)
    mirrors_before = copy.deepcopy(sync.mirrors)

    state = AppState()
    for view in VIEWS + list(reversed(VIEWS)):
        state.select_view(view)

    assert store.calls == calls_before
    assert sync.mirrors == mirrors_before
    assert sync.pending() == 0


def test_reset_clears_view_and_assist():
    state = AppState()
    state.select_view("settings")
    state.assist.begin("Plan for today")
    state.reset()
    assert state.view == "dashboard"
    assert state.assist.visible is False
    assert state.assist.loading is False
