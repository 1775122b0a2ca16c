from __future__ import annotations

import pandas as pd

from src.model import Spot, coerce_spots_schema
from src.presentation import (
    SELECTED_Z_INDEX,
    add_popup_columns,
    annotate_plan_membership,
    format_rating,
    popup_payload,
    split_marker_layers,
    viewport_bounds,
)


def _frame() -> pd.DataFrame:
    return coerce_spots_schema(
        pd.DataFrame(
            {
                "id": [1, 2, 3],
                "name": ["Gallery", "Market", "Pier"],
                "lat": [-37.82, -37.80, -37.86],
                "lng": [144.96, 144.95, 144.97],
                "accessibilityRating": [4.5, 3.0, None],
                "wheelchairAccessible": [True, False, True],
                "accessibleRestroom": [True, False, False],
                "sensoryAids": [False, True, False],
                "parkingInfo": ["Basement", "Street", None],
            }
        )
    )


def test_annotate_marks_planned_spots_as_selected() -> None:
    annotated = annotate_plan_membership(_frame(), ["2"])

    assert annotated["in_plan"].tolist() == [False, True, False]
    assert annotated["marker_variant"].tolist() == ["default", "selected", "default"]
    assert annotated["z_index"].tolist() == [0, SELECTED_Z_INDEX, 0]


def test_split_marker_layers_puts_selected_rows_in_second_layer() -> None:
    annotated = annotate_plan_membership(_frame(), ["1", "3"])

    default_rows, selected_rows = split_marker_layers(annotated)

    assert default_rows["id"].tolist() == ["2"]
    assert selected_rows["id"].tolist() == ["1", "3"]


def test_popup_payload_describes_accessibility_attributes() -> None:
    spot = Spot(
        id="1",
        name="Gallery",
        description="Art museum",
        lat=-37.82,
        lng=144.96,
        wheelchair_accessible=True,
        accessible_restroom=False,
        accessibility_rating=4.5,
        sensory_aids=True,
        parking_info="Basement",
    )

    payload = popup_payload(spot)

    assert payload["name"] == "Gallery"
    assert payload["description"] == "Art museum"
    assert payload["wheelchair"] == "Wheelchair Accessible"
    assert payload["restroom"] == "No Accessible Restroom"
    assert payload["rating"] == "Accessibility Rating: 4.5 / 5"
    assert payload["sensory"] == "Sensory Aids Available"
    assert payload["parking"] == "Parking: Basement"


def test_popup_columns_match_row_values() -> None:
    enriched = add_popup_columns(_frame())

    assert enriched.loc[1, "popup_wheelchair"] == "Not Wheelchair Accessible"
    assert enriched.loc[0, "popup_restroom"] == "Accessible Restroom Available"
    assert enriched.loc[2, "popup_rating"] == "Accessibility Rating: N/A"
    assert enriched.loc[1, "popup_sensory"] == "Sensory Aids Available"
    assert enriched.loc[2, "popup_parking"] == "Parking: "


def test_viewport_bounds_cover_all_located_spots() -> None:
    bounds = viewport_bounds(_frame())

    assert bounds == [[144.95, -37.86], [144.97, -37.80]]


def test_viewport_bounds_is_none_without_coordinates() -> None:
    frame = _frame()
    frame["lat"] = float("nan")

    assert viewport_bounds(frame) is None
    assert viewport_bounds(frame.iloc[0:0]) is None


def test_format_rating_handles_missing_and_whole_numbers() -> None:
    assert format_rating(4.0) == "4 / 5"
    assert format_rating(3.7) == "3.7 / 5"
    assert format_rating(None) == "N/A"
