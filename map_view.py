"""
Map rendering for the Walking Route Planner.

Builds the folium map (pins + route polylines) and the per-leg summary
table shown beneath it.
"""

import logging
from typing import Sequence

import folium
import pandas as pd

from config import (
    DEFAULT_CENTER, DEFAULT_ZOOM, MAP_TILE,
    ROUTE_COLOR, ROUTE_WEIGHT, ROUTE_OPACITY
)
from geocoding import Annotation
from route_planner import RouteLeg, visible_coordinates
from utils import bounding_box, format_distance, format_duration

logger = logging.getLogger(__name__)

LEG_COLUMNS = ['leg', 'from', 'to', 'distance_m', 'duration_min', 'distance']


def build_map(annotations: Sequence[Annotation], overlays: Sequence[RouteLeg],
              center=DEFAULT_CENTER, zoom: int = DEFAULT_ZOOM) -> folium.Map:
    """
    Create a map showing the annotations and route overlays.

    Args:
        annotations: Pins in placement order
        overlays: Route legs to draw as polylines
        center: Map center used when there is nothing to show
        zoom: Initial zoom level

    Returns:
        folium.Map fitted to all annotations and overlays
    """
    m = folium.Map(location=center, zoom_start=zoom, tiles=MAP_TILE)

    for idx, annotation in enumerate(annotations, start=1):
        popup_html = f"""
        <div style="font-family: Arial; width: 200px;">
            <b>{idx}. {annotation.title}</b><br>
            <span style="font-size: 12px;">{annotation.lat:.5f}, {annotation.lon:.5f}</span>
        </div>
        """
        folium.Marker(
            location=annotation.coordinate,
            tooltip=annotation.title,
            popup=folium.Popup(popup_html, max_width=250)
        ).add_to(m)

    for leg in overlays:
        if len(leg.route.coordinates) < 2:
            continue
        folium.PolyLine(
            leg.route.coordinates,
            color=ROUTE_COLOR,
            weight=ROUTE_WEIGHT,
            opacity=ROUTE_OPACITY,
            tooltip=f"{leg.start.title} → {leg.end.title}: "
                    f"{format_distance(leg.route.distance)}, {format_duration(leg.route.duration)}"
        ).add_to(m)

    coords = visible_coordinates(annotations, overlays)

    if coords:
        m.fit_bounds(bounding_box(coords))

    return m


def legs_table(overlays: Sequence[RouteLeg]) -> pd.DataFrame:
    """Summary table with one row per drawn leg."""
    rows = [
        {
            'leg': idx,
            'from': leg.start.title,
            'to': leg.end.title,
            'distance_m': round(leg.route.distance, 1),
            'duration_min': round(leg.route.duration / 60, 1),
            'distance': format_distance(leg.route.distance),
        }
        for idx, leg in enumerate(overlays, start=1)
    ]
    return pd.DataFrame(rows, columns=LEG_COLUMNS)
