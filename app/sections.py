from __future__ import annotations

import html
import sys
from pathlib import Path

import pandas as pd
import pydeck as pdk
import streamlit as st

try:
    from app.shared import get_loaded_source_label, get_planner_state, store_planner_state
    from app.theme import (
        DEFAULT_MARKER_RADIUS,
        DEFAULT_MARKER_RGBA,
        SELECTED_MARKER_RADIUS,
        SELECTED_MARKER_RGBA,
        map_style,
    )
except ModuleNotFoundError:
    from shared import get_loaded_source_label, get_planner_state, store_planner_state
    from theme import (
        DEFAULT_MARKER_RADIUS,
        DEFAULT_MARKER_RGBA,
        SELECTED_MARKER_RADIUS,
        SELECTED_MARKER_RGBA,
        map_style,
    )

try:
    from src.model import Spot, spots_from_frame
    from src.planner import (
        PlannerState,
        active_notification,
        add_to_plan,
        clear_plan,
        close_finalization,
        expire_notification,
        remove_from_plan,
        request_finalization,
    )
    from src.presentation import (
        POPUP_COLUMNS,
        add_popup_columns,
        format_rating,
        split_marker_layers,
        viewport_bounds,
    )
except ModuleNotFoundError:
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))
    from src.model import Spot, spots_from_frame
    from src.planner import (
        PlannerState,
        active_notification,
        add_to_plan,
        clear_plan,
        close_finalization,
        expire_notification,
        remove_from_plan,
        request_finalization,
    )
    from src.presentation import (
        POPUP_COLUMNS,
        add_popup_columns,
        format_rating,
        split_marker_layers,
        viewport_bounds,
    )

NOTIFICATION_POLL_SECONDS = 0.5
MAX_FIT_ZOOM = 15

MAP_TEXT_COLUMNS = ["id", "name", "description", *POPUP_COLUMNS]

EMPTY_PLAN_TEXT = (
    "Add spots to your itinerary to get an estimated travel time and optimise your "
    "travel plan for the best experience."
)

FINALISATION_TEXT = (
    "This would go to a page that finalises and provides a curated plan along with pdf "
    "download option, offering discounts and optimised itineraries based on your trip duration."
)


def _apply(state: PlannerState) -> None:
    store_planner_state(state)
    st.rerun()


def _render_spot_card(spot: Spot, highlighted: bool = False) -> None:
    css_class = "spot-card highlighted-spot" if highlighted else "spot-card"
    st.markdown(
        (
            f'<div class="{css_class}">'
            f"<h4>{html.escape(spot.name)}</h4>"
            f"<p>Accessibility Rating: {format_rating(spot.accessibility_rating)}</p>"
            "</div>"
        ),
        unsafe_allow_html=True,
    )


@st.fragment(run_every=NOTIFICATION_POLL_SECONDS)
def render_notification() -> None:
    state = get_planner_state()
    current = expire_notification(state)
    if current is not state:
        store_planner_state(current)

    message = active_notification(current)
    if message:
        st.warning(message)


def render_finalization_section(state: PlannerState) -> None:
    if not state.finalization_open:
        return

    with st.container(border=True):
        st.markdown(
            '<h2 class="finalisation-title">Travel Plan Finalisation</h2>',
            unsafe_allow_html=True,
        )
        st.write(FINALISATION_TEXT)
        if st.button("Close", key="close_finalisation"):
            _apply(close_finalization(state))


def render_spot_list_section(annotated: pd.DataFrame, state: PlannerState) -> None:
    st.subheader("Tourist Spots")
    st.caption(f"{len(annotated)} spots shown · source: {get_loaded_source_label()}")

    if annotated.empty:
        st.info("No spots match the selected filters.")
        return

    for spot, in_plan in zip(spots_from_frame(annotated), annotated["in_plan"].tolist()):
        _render_spot_card(spot, highlighted=bool(in_plan))
        if st.button("Add to Travel Plan", key=f"add_{spot.id}"):
            _apply(add_to_plan(state, spot))


def _map_records(frame: pd.DataFrame) -> pd.DataFrame:
    records = frame.loc[:, [*MAP_TEXT_COLUMNS, "lat", "lng"]].copy()
    for column in MAP_TEXT_COLUMNS:
        records[column] = records[column].astype("string").fillna("").astype(str)
    return records.dropna(subset=["lat", "lng"])


def _marker_layer(
    layer_id: str,
    frame: pd.DataFrame,
    fill_color: list[int],
    radius: int,
) -> pdk.Layer:
    return pdk.Layer(
        "ScatterplotLayer",
        id=layer_id,
        data=_map_records(frame),
        get_position="[lng, lat]",
        get_radius=radius,
        radius_min_pixels=6,
        get_fill_color=fill_color,
        stroked=True,
        get_line_color=[255, 255, 255, 220],
        line_width_min_pixels=1,
        pickable=True,
    )


def _fit_view(bounds: list[list[float]]) -> pdk.ViewState:
    view_state = pdk.data_utils.compute_view(bounds)
    view_state.zoom = min(view_state.zoom, MAX_FIT_ZOOM)
    return view_state


def render_map_section(catalog: pd.DataFrame, annotated: pd.DataFrame) -> None:
    bounds = viewport_bounds(annotated) or viewport_bounds(catalog)
    if bounds is None:
        st.info("No spot coordinates available.")
        return

    default_rows, selected_rows = split_marker_layers(add_popup_columns(annotated))
    # Selected layer last so its markers draw on top.
    layers = [
        _marker_layer("default-spots", default_rows, DEFAULT_MARKER_RGBA, DEFAULT_MARKER_RADIUS),
        _marker_layer("selected-spots", selected_rows, SELECTED_MARKER_RGBA, SELECTED_MARKER_RADIUS),
    ]

    deck = pdk.Deck(
        map_style=map_style(),
        initial_view_state=_fit_view(bounds),
        layers=layers,
        tooltip={
            "html": (
                "<b>{name}</b><br/>"
                "{description}<br/>"
                "{popup_wheelchair}<br/>"
                "{popup_restroom}<br/>"
                "{popup_rating}<br/>"
                "{popup_sensory}<br/>"
                "{popup_parking}"
            )
        },
    )
    st.pydeck_chart(deck, use_container_width=True)


def render_travel_plan_section(state: PlannerState) -> None:
    st.subheader("My Travel Plan")
    if st.button("Clear List", key="clear_plan"):
        _apply(clear_plan(state))

    if not state.plan:
        st.caption(EMPTY_PLAN_TEXT)
        return

    for spot in state.plan:
        _render_spot_card(spot)
        if st.button("Remove", key=f"remove_{spot.id}"):
            _apply(remove_from_plan(state, spot.id))

    if st.button("Done", key="finalise_plan", type="primary", use_container_width=True):
        _apply(request_finalization(state))
