# install_dashboard/services/install_tracker.py
"""
Install tracker view state: the selected day or date range, the two filters,
the grouping dimension, and the records loaded for them.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import Callable, Optional

from install_dashboard.constants import TECHS, INSTALLERS, GROUP_BY_TECH, GROUP_BY_INSTALLER
from install_dashboard.models import InstallRecord
from install_dashboard.services.install_demo import fetch_installs_demo
from install_dashboard.services.install_report import (
    build_report,
    csv_filename,
    enumerate_dates_inclusive,
    normalize_range,
)

log = logging.getLogger(__name__)

FetchInstalls = Callable[[str], list[InstallRecord]]


def today_iso() -> str:
    return date.today().isoformat()


class CancelToken:
    """Set on teardown; a load checks it before applying any result."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


def _toggled(selection: tuple[str, ...], name: str) -> tuple[str, ...]:
    if name in selection:
        return tuple(x for x in selection if x != name)
    return selection + (name,)


@dataclass(frozen=True)
class InstallTrackerState:
    date: str = field(default_factory=today_iso)
    use_range: bool = False
    range_start: str = field(default_factory=today_iso)
    range_end: str = field(default_factory=today_iso)
    selected_techs: tuple[str, ...] = TECHS
    selected_installers: tuple[str, ...] = INSTALLERS
    group_mode: str = GROUP_BY_TECH

    @property
    def all_techs_selected(self) -> bool:
        return len(self.selected_techs) == len(TECHS) and len(TECHS) > 0

    @property
    def all_installers_selected(self) -> bool:
        return len(self.selected_installers) == len(INSTALLERS) and len(INSTALLERS) > 0

    # Filters
    def toggle_tech(self, name: str) -> "InstallTrackerState":
        return replace(self, selected_techs=_toggled(self.selected_techs, name))

    def toggle_all_techs(self) -> "InstallTrackerState":
        return replace(self, selected_techs=() if self.all_techs_selected else TECHS)

    def toggle_installer(self, name: str) -> "InstallTrackerState":
        return replace(self, selected_installers=_toggled(self.selected_installers, name))

    def toggle_all_installers(self) -> "InstallTrackerState":
        return replace(self, selected_installers=() if self.all_installers_selected else INSTALLERS)

    # Single-day navigation
    def shift_date(self, days: int) -> "InstallTrackerState":
        shifted = date.fromisoformat(self.date) + timedelta(days=days)
        return replace(self, date=shifted.isoformat())

    def go_today(self) -> "InstallTrackerState":
        return replace(self, date=today_iso(), use_range=False)

    # Range mode
    def apply_range(self, start: Optional[str] = None, end: Optional[str] = None) -> "InstallTrackerState":
        s, e = normalize_range(start or self.range_start, end or self.range_end)
        return replace(self, range_start=s, range_end=e, use_range=True)

    def exit_range(self) -> "InstallTrackerState":
        return replace(self, use_range=False)

    def toggle_grouping(self) -> "InstallTrackerState":
        mode = GROUP_BY_INSTALLER if self.group_mode == GROUP_BY_TECH else GROUP_BY_TECH
        return replace(self, group_mode=mode)

    def dates_to_load(self) -> list[str]:
        if not self.use_range:
            return [self.date]
        start, end = normalize_range(self.range_start, self.range_end)
        return enumerate_dates_inclusive(start, end)

    def export_filename(self) -> str:
        if self.use_range:
            return csv_filename(self.group_mode, range_start=self.range_start, range_end=self.range_end)
        return csv_filename(self.group_mode, day=self.date)


def load_installs(
    state: InstallTrackerState,
    cancel_token: Optional[CancelToken] = None,
    fetch: FetchInstalls = fetch_installs_demo,
) -> Optional[list[InstallRecord]]:
    """
    Fetch records for the state's day, or each day of its range one after another.

    Returns None when the token was cancelled while loading.
    """
    cancel_token = cancel_token or CancelToken()
    records: list[InstallRecord] = []
    for day in state.dates_to_load():
        chunk = fetch(day)
        if cancel_token.cancelled:
            log.info("Install load cancelled after %s", day)
            return None
        records.extend(chunk)
    return records


class InstallTracker:
    """Holds the loaded records; results are applied by whole-list replacement."""

    def __init__(self, state: Optional[InstallTrackerState] = None, fetch: FetchInstalls = fetch_installs_demo):
        self.state = state or InstallTrackerState()
        self.all_data: list[InstallRecord] = []
        self._fetch = fetch
        self._cancel_token: Optional[CancelToken] = None

    def update(self, state: InstallTrackerState) -> bool:
        """Switch to a new state and reload. Returns False if the load was superseded."""
        self.teardown()
        token = CancelToken()
        self._cancel_token = token
        self.state = state

        records = load_installs(state, token, self._fetch)
        if records is None or token.cancelled:
            return False
        self.all_data = records
        return True

    def teardown(self):
        if self._cancel_token is not None:
            self._cancel_token.cancel()
            self._cancel_token = None

    def report(self) -> dict:
        return build_report(
            self.all_data,
            self.state.group_mode,
            self.state.selected_techs,
            self.state.selected_installers,
            range_mode=self.state.use_range,
        )
