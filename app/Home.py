import logging
import sys
from pathlib import Path

import streamlit as st

try:
    from app.sections import (
        render_finalization_section,
        render_map_section,
        render_notification,
        render_spot_list_section,
        render_travel_plan_section,
    )
    from app.shared import load_spots_cached, render_sidebar_filters
    from app.theme import apply_global_styles, render_banner
except ModuleNotFoundError:
    from sections import (
        render_finalization_section,
        render_map_section,
        render_notification,
        render_spot_list_section,
        render_travel_plan_section,
    )
    from shared import load_spots_cached, render_sidebar_filters
    from theme import apply_global_styles, render_banner

try:
    from src.planner import compute_filtered, plan_ids
    from src.presentation import annotate_plan_membership
except ModuleNotFoundError:
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))
    from src.planner import compute_filtered, plan_ids
    from src.presentation import annotate_plan_membership

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

st.set_page_config(
    page_title="Accessible Tourist Spots",
    page_icon="🗺️",
    layout="wide",
    initial_sidebar_state="expanded",
)
apply_global_styles()
render_banner("Accessible Tourist Spots")

catalog = load_spots_cached()
state = render_sidebar_filters()

render_notification()
render_finalization_section(state)

if catalog.empty:
    st.warning("No spot catalog found. Add `data/locations.json` and reload the page.")
    st.stop()

filtered = compute_filtered(catalog, state.criteria)
annotated = annotate_plan_membership(filtered, plan_ids(state))

list_col, map_col, plan_col = st.columns((1, 2, 1))
with list_col:
    render_spot_list_section(annotated, state)
with map_col:
    render_map_section(catalog, annotated)
with plan_col:
    render_travel_plan_section(state)
