from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

DATA_DIR = Path("data")
JSON_FILENAME = "locations.json"
CSV_FILENAME = "locations.csv"

SPOT_FIELDS = [
    "id",
    "name",
    "description",
    "lat",
    "lng",
    "wheelchair_accessible",
    "accessible_restroom",
    "accessibility_rating",
    "sensory_aids",
    "parking_info",
]

SOURCE_COLUMN_MAP = {
    "wheelchairAccessible": "wheelchair_accessible",
    "accessibleRestroom": "accessible_restroom",
    "accessibilityRating": "accessibility_rating",
    "sensoryAids": "sensory_aids",
    "parkingInfo": "parking_info",
}

NUMERIC_FIELDS = ["lat", "lng", "accessibility_rating"]
BOOL_FIELDS = ["wheelchair_accessible", "accessible_restroom", "sensory_aids"]
STRING_FIELDS = [
    column for column in SPOT_FIELDS if column not in set(NUMERIC_FIELDS + BOOL_FIELDS)
]

TRUE_STRINGS = {"true", "t", "yes", "y", "1"}
FALSE_STRINGS = {"false", "f", "no", "n", "0", ""}


@dataclass(frozen=True, slots=True)
class Spot:
    id: str
    name: str
    description: str
    lat: float
    lng: float
    wheelchair_accessible: bool
    accessible_restroom: bool
    accessibility_rating: float
    sensory_aids: bool
    parking_info: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Spot:
        return cls(
            id=str(row["id"]),
            name=_clean_text(row.get("name")),
            description=_clean_text(row.get("description")),
            lat=_clean_float(row.get("lat")),
            lng=_clean_float(row.get("lng")),
            wheelchair_accessible=_clean_bool(row.get("wheelchair_accessible")),
            accessible_restroom=_clean_bool(row.get("accessible_restroom")),
            accessibility_rating=_clean_float(row.get("accessibility_rating")),
            sensory_aids=_clean_bool(row.get("sensory_aids")),
            parking_info=_clean_text(row.get("parking_info")),
        )

    def to_record(self) -> dict[str, Any]:
        return asdict(self)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _clean_text(value: Any) -> str:
    if _is_missing(value):
        return ""
    return str(value)


def _clean_float(value: Any) -> float:
    if _is_missing(value):
        return float("nan")
    return float(value)


def _clean_bool(value: Any) -> bool:
    if _is_missing(value):
        return False
    return bool(value)


def _empty_spots() -> pd.DataFrame:
    return pd.DataFrame(columns=SPOT_FIELDS)


def _to_bool(series: pd.Series) -> pd.Series:
    if pd.api.types.is_bool_dtype(series):
        return series.fillna(False).astype(bool)

    def _parse(value: Any) -> bool:
        if _is_missing(value):
            return False
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return value != 0
        text = str(value).strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text not in FALSE_STRINGS:
            logger.warning("Unrecognised boolean value %r treated as False", value)
        return False

    return series.map(_parse).astype(bool)


def _id_text(value: Any) -> Any:
    if _is_missing(value):
        return pd.NA
    # A missing id elsewhere in the column turns integer ids into floats.
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def coerce_spots_schema(frame: pd.DataFrame) -> pd.DataFrame:
    spots = frame.rename(columns=SOURCE_COLUMN_MAP).copy()

    for column in SPOT_FIELDS:
        if column not in spots.columns:
            spots[column] = pd.NA

    spots = spots.loc[:, SPOT_FIELDS]
    spots["id"] = spots["id"].map(_id_text)

    for column in NUMERIC_FIELDS:
        spots[column] = pd.to_numeric(spots[column], errors="coerce").astype("float64")

    for column in BOOL_FIELDS:
        spots[column] = _to_bool(spots[column])

    for column in STRING_FIELDS:
        spots[column] = spots[column].astype("string").str.strip()
    spots["id"] = spots["id"].replace({"": pd.NA})

    missing_id = spots["id"].isna()
    if missing_id.any():
        logger.warning("Dropped %s spot rows without an id", int(missing_id.sum()))
        spots = spots.loc[~missing_id]

    duplicated = spots["id"].duplicated(keep="first")
    if duplicated.any():
        logger.warning(
            "Dropped duplicate spot ids: %s",
            ", ".join(spots.loc[duplicated, "id"].astype(str).tolist()),
        )
        spots = spots.loc[~duplicated]

    return spots.reset_index(drop=True)


def _read_json_records(path: Path) -> pd.DataFrame:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("spots", [])
    return pd.DataFrame.from_records(payload)


def load_spots_with_source(data_dir: Path = DATA_DIR) -> tuple[pd.DataFrame, str]:
    json_path = data_dir / JSON_FILENAME
    csv_path = data_dir / CSV_FILENAME

    if json_path.exists():
        try:
            spots = coerce_spots_schema(_read_json_records(json_path))
            logger.info("Loaded spot catalog file=%s rows=%s", json_path, len(spots))
            return spots, "json"
        except Exception:  # noqa: BLE001
            logger.exception("Could not read spot catalog file=%s", json_path)

    if csv_path.exists():
        try:
            spots = coerce_spots_schema(pd.read_csv(csv_path, dtype={"id": "string"}))
            logger.info("Loaded spot catalog file=%s rows=%s", csv_path, len(spots))
            return spots, "csv"
        except Exception:  # noqa: BLE001
            logger.exception("Could not read spot catalog file=%s", csv_path)

    logger.warning("No spot catalog found in %s", data_dir)
    return _empty_spots(), "empty"


def load_spots(data_dir: Path = DATA_DIR) -> pd.DataFrame:
    spots, _ = load_spots_with_source(data_dir)
    return spots


def spots_from_frame(frame: pd.DataFrame) -> list[Spot]:
    return [Spot.from_row(row) for row in frame.to_dict(orient="records")]
