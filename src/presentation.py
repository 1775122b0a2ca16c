from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from src.model import Spot

DEFAULT_VARIANT = "default"
SELECTED_VARIANT = "selected"
SELECTED_Z_INDEX = 1000
DEFAULT_Z_INDEX = 0

POPUP_COLUMNS = [
    "popup_wheelchair",
    "popup_restroom",
    "popup_rating",
    "popup_sensory",
    "popup_parking",
]


def format_rating(value: float | int | None) -> str:
    if value is None or pd.isna(value):
        return "N/A"
    return f"{float(value):g} / 5"


def _wheelchair_text(flag: bool) -> str:
    return "Wheelchair Accessible" if flag else "Not Wheelchair Accessible"


def _restroom_text(flag: bool) -> str:
    return "Accessible Restroom Available" if flag else "No Accessible Restroom"


def _sensory_text(flag: bool) -> str:
    return "Sensory Aids Available" if flag else "No Sensory Aids"


def popup_payload(spot: Spot) -> dict[str, str]:
    return {
        "name": spot.name,
        "description": spot.description,
        "wheelchair": _wheelchair_text(spot.wheelchair_accessible),
        "restroom": _restroom_text(spot.accessible_restroom),
        "rating": f"Accessibility Rating: {format_rating(spot.accessibility_rating)}",
        "sensory": _sensory_text(spot.sensory_aids),
        "parking": f"Parking: {spot.parking_info}",
    }


def add_popup_columns(frame: pd.DataFrame) -> pd.DataFrame:
    enriched = frame.copy()
    if enriched.empty:
        for column in POPUP_COLUMNS:
            enriched[column] = pd.Series(dtype="string")
        return enriched

    enriched["popup_wheelchair"] = enriched["wheelchair_accessible"].map(_wheelchair_text)
    enriched["popup_restroom"] = enriched["accessible_restroom"].map(_restroom_text)
    enriched["popup_rating"] = "Accessibility Rating: " + enriched["accessibility_rating"].map(
        format_rating
    )
    enriched["popup_sensory"] = enriched["sensory_aids"].map(_sensory_text)
    enriched["popup_parking"] = "Parking: " + enriched["parking_info"].astype("string").fillna("")
    return enriched


def annotate_plan_membership(filtered: pd.DataFrame, plan_ids: Iterable[str]) -> pd.DataFrame:
    annotated = filtered.copy()
    selected_ids = {str(spot_id) for spot_id in plan_ids}

    annotated["in_plan"] = annotated["id"].astype(str).isin(selected_ids).astype(bool)
    annotated["marker_variant"] = annotated["in_plan"].map(
        {True: SELECTED_VARIANT, False: DEFAULT_VARIANT}
    )
    annotated["z_index"] = annotated["in_plan"].map(
        {True: SELECTED_Z_INDEX, False: DEFAULT_Z_INDEX}
    )
    return annotated


def split_marker_layers(annotated: pd.DataFrame) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Split rows into (default, selected) so selected markers can be drawn last."""
    ordered = annotated.sort_values("z_index", kind="stable")
    selected_mask = ordered["marker_variant"] == SELECTED_VARIANT
    return ordered.loc[~selected_mask], ordered.loc[selected_mask]


def viewport_bounds(frame: pd.DataFrame) -> list[list[float]] | None:
    if frame.empty:
        return None

    lat = pd.to_numeric(frame["lat"], errors="coerce")
    lng = pd.to_numeric(frame["lng"], errors="coerce")
    located = lat.notna() & lng.notna()
    if not located.any():
        return None

    return [
        [float(lng[located].min()), float(lat[located].min())],
        [float(lng[located].max()), float(lat[located].max())],
    ]
