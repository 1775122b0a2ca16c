"""Filter and travel-plan state for the spot viewer.

The state is an immutable :class:`PlannerState`. Every user action maps to a
transition function that takes the current state and returns the next one, so
the rules can be exercised without a Streamlit session.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Any

import pandas as pd

from src.model import Spot

logger = logging.getLogger(__name__)

RATING_MIN = 0.0
RATING_MAX = 5.0
RATING_STEP = 0.1
NOTIFICATION_SECONDS = 3.0


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    accessible_only: bool = False
    min_rating: float = RATING_MIN


@dataclass(frozen=True, slots=True)
class Notification:
    message: str
    expires_at: float

    def is_active(self, now: float) -> bool:
        return now < self.expires_at


@dataclass(frozen=True, slots=True)
class PlannerState:
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    plan: tuple[Spot, ...] = ()
    notification: Notification | None = None
    finalization_open: bool = False


def _now(now: float | None) -> float:
    return time.monotonic() if now is None else now


def clamp_rating(value: Any) -> float | None:
    """Return ``value`` as a rating inside [0, 5], or None if it is not numeric."""
    if isinstance(value, bool):
        return None
    try:
        number = pd.to_numeric(value, errors="coerce")
        if not pd.api.types.is_number(number) or pd.isna(number):
            return None
        number = float(number)
    except (TypeError, ValueError):
        return None
    return min(max(number, RATING_MIN), RATING_MAX)


def set_accessible_only(state: PlannerState, value: bool) -> PlannerState:
    return replace(state, criteria=replace(state.criteria, accessible_only=bool(value)))


def set_min_rating(state: PlannerState, value: Any) -> PlannerState:
    rating = clamp_rating(value)
    if rating is None:
        logger.info("Ignored non-numeric minimum rating %r", value)
        return state
    return replace(state, criteria=replace(state.criteria, min_rating=rating))


def reset_filters(state: PlannerState) -> PlannerState:
    return replace(state, criteria=FilterCriteria())


def compute_filtered(catalog: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    if catalog.empty:
        return catalog

    rating = pd.to_numeric(catalog["accessibility_rating"], errors="coerce")
    mask = (rating >= criteria.min_rating).fillna(False)

    if criteria.accessible_only:
        wheelchair = catalog["wheelchair_accessible"].fillna(False).astype(bool)
        restroom = catalog["accessible_restroom"].fillna(False).astype(bool)
        mask = mask & wheelchair & restroom

    return catalog.loc[mask.astype(bool)]


def plan_ids(state: PlannerState) -> list[str]:
    return [spot.id for spot in state.plan]


def is_in_plan(state: PlannerState, spot_id: str) -> bool:
    return any(spot.id == spot_id for spot in state.plan)


def duplicate_message(spot: Spot) -> str:
    return f"{spot.name} is already in your travel plan."


def add_to_plan(state: PlannerState, spot: Spot, now: float | None = None) -> PlannerState:
    """Append ``spot`` unless its id is already planned.

    A duplicate leaves the plan untouched and raises a notification that
    expires ``NOTIFICATION_SECONDS`` later. A newer rejection replaces any
    notification still showing and restarts the expiry.
    """
    if not is_in_plan(state, spot.id):
        return replace(state, plan=(*state.plan, spot))

    logger.info("Rejected duplicate travel plan entry id=%s", spot.id)
    notification = Notification(
        message=duplicate_message(spot),
        expires_at=_now(now) + NOTIFICATION_SECONDS,
    )
    return replace(state, notification=notification)


def remove_from_plan(state: PlannerState, spot_id: str) -> PlannerState:
    if not is_in_plan(state, spot_id):
        return state
    return replace(state, plan=tuple(spot for spot in state.plan if spot.id != spot_id))


def clear_plan(state: PlannerState) -> PlannerState:
    return replace(state, plan=())


def request_finalization(state: PlannerState) -> PlannerState:
    if not state.plan:
        return state
    return replace(state, finalization_open=True)


def close_finalization(state: PlannerState) -> PlannerState:
    return replace(state, finalization_open=False)


def active_notification(state: PlannerState, now: float | None = None) -> str | None:
    if state.notification is None or not state.notification.is_active(_now(now)):
        return None
    return state.notification.message


def expire_notification(state: PlannerState, now: float | None = None) -> PlannerState:
    if state.notification is None or state.notification.is_active(_now(now)):
        return state
    return replace(state, notification=None)
