from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import streamlit as st

try:
    from src.model import load_spots_with_source
    from src.planner import (
        RATING_MAX,
        RATING_MIN,
        RATING_STEP,
        PlannerState,
        reset_filters,
        set_accessible_only,
        set_min_rating,
    )
except ModuleNotFoundError:
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))
    from src.model import load_spots_with_source
    from src.planner import (
        RATING_MAX,
        RATING_MIN,
        RATING_STEP,
        PlannerState,
        reset_filters,
        set_accessible_only,
        set_min_rating,
    )

STATE_KEY = "planner_state"
ACCESSIBLE_ONLY_KEY = "filter_accessible_only"
MIN_RATING_KEY = "filter_min_rating"


@st.cache_data(show_spinner=False)
def load_spots_with_source_cached() -> tuple[pd.DataFrame, str]:
    return load_spots_with_source()


@st.cache_data(show_spinner=False)
def load_spots_cached() -> pd.DataFrame:
    spots, _ = load_spots_with_source_cached()
    return spots


def get_loaded_source_label() -> str:
    _, source = load_spots_with_source_cached()
    return source


def get_planner_state() -> PlannerState:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = PlannerState()
    return st.session_state[STATE_KEY]


def store_planner_state(state: PlannerState) -> None:
    st.session_state[STATE_KEY] = state


def _sync_filter_widgets(state: PlannerState) -> None:
    st.session_state[ACCESSIBLE_ONLY_KEY] = state.criteria.accessible_only
    st.session_state[MIN_RATING_KEY] = state.criteria.min_rating


def _init_filter_widgets(state: PlannerState) -> None:
    if ACCESSIBLE_ONLY_KEY not in st.session_state or MIN_RATING_KEY not in st.session_state:
        _sync_filter_widgets(state)


def render_sidebar_filters() -> PlannerState:
    state = get_planner_state()
    _init_filter_widgets(state)

    st.sidebar.header("Filters")
    if st.sidebar.button("Reset Filters", key="reset_filters"):
        state = reset_filters(state)
        store_planner_state(state)
        _sync_filter_widgets(state)
        st.rerun()

    accessible_only = st.sidebar.checkbox(
        "Show only accessible-friendly spots",
        key=ACCESSIBLE_ONLY_KEY,
    )
    min_rating = st.sidebar.number_input(
        "Minimum Accessibility Rating",
        min_value=RATING_MIN,
        max_value=RATING_MAX,
        step=RATING_STEP,
        format="%.1f",
        key=MIN_RATING_KEY,
    )

    state = set_accessible_only(state, accessible_only)
    state = set_min_rating(state, min_rating)
    store_planner_state(state)
    return state
