"""
Route planning state for the Walking Route Planner.

Holds the ordered pins placed by the user and the route overlays drawn
between them. Kept free of any UI code so the page only wires buttons
to these methods.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from directions import (
    DirectionsClient, DirectionsError, Route, get_directions_client, shortest_route
)
from geocoding import Annotation, geocode_address

logger = logging.getLogger(__name__)


@dataclass
class RouteLeg:
    """Shortest walking route between two consecutive annotations."""
    start: Annotation
    end: Annotation
    route: Route


@dataclass
class RouteResult:
    """Outcome of building a route through all annotations."""
    legs: List[RouteLeg] = field(default_factory=list)
    failures: List[Tuple[int, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def total_distance(self) -> float:
        return sum(leg.route.distance for leg in self.legs)

    @property
    def total_duration(self) -> float:
        return sum(leg.route.duration for leg in self.legs)


class RoutePlanner:
    """Ordered annotations plus the overlays drawn between them."""

    def __init__(self, geocoder: Callable[[str], Annotation] = geocode_address,
                 directions: Optional[DirectionsClient] = None):
        self.geocoder = geocoder
        self._directions = directions
        self._annotations: List[Annotation] = []
        self.overlays: List[RouteLeg] = []

    @property
    def directions(self) -> DirectionsClient:
        # Created lazily so the page can load without a configured backend
        if self._directions is None:
            self._directions = get_directions_client()
        return self._directions

    @property
    def annotations(self) -> Tuple[Annotation, ...]:
        return tuple(self._annotations)

    @property
    def can_route(self) -> bool:
        return len(self._annotations) >= 2

    @property
    def can_reset(self) -> bool:
        return bool(self._annotations or self.overlays)

    def add_address(self, text: str) -> Annotation:
        """
        Geocode an address and append it as the next pin.

        Raises:
            GeocodingError: If the address cannot be resolved; the planner
                is left unchanged
        """
        annotation = self.geocoder(text)
        self._annotations.append(annotation)
        logger.info(f"Added annotation #{len(self._annotations)}: {annotation.title}")
        return annotation

    def build_route(self) -> RouteResult:
        """
        Request the shortest walking route for every consecutive pair.

        A leg that fails is recorded in the result and the remaining legs
        are still requested. The previous overlays are replaced.

        Raises:
            ValueError: If fewer than two annotations are placed
        """
        if not self.can_route:
            raise ValueError("At least two annotations are required to build a route.")

        result = RouteResult()

        for index in range(len(self._annotations) - 1):
            start = self._annotations[index]
            end = self._annotations[index + 1]

            try:
                routes = self.directions.request_routes(start.coordinate, end.coordinate)
                route = shortest_route(routes)
            except DirectionsError as e:
                logger.warning(f"No route for leg {index + 1} ({start.title} -> {end.title}): {e}")
                result.failures.append((index, str(e)))
                continue

            result.legs.append(RouteLeg(start=start, end=end, route=route))

        self.overlays = list(result.legs)
        logger.info(
            f"Built route: {len(result.legs)} legs, {len(result.failures)} failed, "
            f"{result.total_distance:.0f} m total"
        )
        return result

    def reset(self) -> None:
        """Remove all pins and overlays."""
        self._annotations.clear()
        self.overlays = []
        logger.info("Planner reset")

    def visible_coordinates(self) -> List[Tuple[float, float]]:
        """Every point the map has to show: pins first, then route geometry."""
        return visible_coordinates(self._annotations, self.overlays)

    def route_summary(self) -> Optional[Tuple[float, float]]:
        """(distance m, duration s) of the drawn route, or None if nothing is drawn."""
        if not self.overlays:
            return None
        drawn = RouteResult(legs=list(self.overlays))
        return (drawn.total_distance, drawn.total_duration)


def visible_coordinates(annotations: Sequence[Annotation],
                        overlays: Sequence[RouteLeg]) -> List[Tuple[float, float]]:
    """Pin positions followed by the geometry of every drawn leg."""
    coords = [a.coordinate for a in annotations]
    for leg in overlays:
        coords.extend(leg.route.coordinates)
    return coords
