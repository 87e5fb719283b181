"""
Walking Directions for the Walking Route Planner
================================================

Two interchangeable backends answer the same question: "give me the
walking alternatives between these two points".

- OSRMDirections talks to an OSRM /route service over HTTP
- GraphDirections builds a local OSM pedestrian graph with OSMnx and
  enumerates the k shortest paths on it

Both return a list of Route objects; shortest_route() picks the one with
the minimum distance.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

import networkx as nx
import osmnx as ox
import requests

from config import (
    DIRECTIONS_BACKEND, OSRM_BASE_URL, OSRM_PROFILE, REQUEST_TIMEOUT,
    OSM_NETWORK_TYPE, GRAPH_ALTERNATIVES,
    GRAPH_BUFFER_M, WALKING_SPEED_MPS
)
from utils import calculate_walking_time, haversine_distance

logger = logging.getLogger(__name__)

# Internal coordinate type: (lat, lon)
LatLon = Tuple[float, float]


class DirectionsError(Exception):
    """Raised when no walking route can be computed between two points."""


@dataclass
class Route:
    """One walking alternative returned by a directions backend."""
    distance: float  # meters
    duration: float  # seconds
    coordinates: List[LatLon] = field(default_factory=list)


class DirectionsClient(Protocol):
    """Anything that returns walking alternatives for a single leg."""

    def request_routes(self, start: LatLon, end: LatLon) -> List[Route]:
        ...


def shortest_route(routes: Sequence[Route]) -> Route:
    """
    Pick the route with the minimum distance.

    Ties keep the earliest route, so the backend's own ranking is
    preserved between equal alternatives.

    Raises:
        DirectionsError: If there are no routes to choose from
    """
    if not routes:
        raise DirectionsError("No routes returned")

    best = routes[0]
    for route in routes:
        if route.distance < best.distance:
            best = route
    return best


class OSRMDirections:
    """
    OSRM client for walking routes.

    Converts internal (lat, lon) to OSRM (lon,lat), asks for alternatives
    and normalizes the response into Route objects.
    """

    def __init__(self, base_url: Optional[str] = OSRM_BASE_URL,
                 profile: str = OSRM_PROFILE, timeout: int = REQUEST_TIMEOUT):
        if not base_url:
            raise ValueError("OSRM base URL not set. Set OSRM_BASE_URL in the .env file.")

        self.base_url = base_url.rstrip('/')
        self.profile = profile
        self.timeout = timeout

    def format_coordinates(self, coords: Sequence[LatLon]) -> str:
        """Convert list of (lat, lon) to OSRM format 'lon,lat;lon,lat;...'"""
        return ';'.join(f"{lon},{lat}" for lat, lon in coords)

    def request_routes(self, start: LatLon, end: LatLon) -> List[Route]:
        """
        Call the OSRM /route endpoint for a single leg.

        Args:
            start: (lat, lon) of the leg start
            end: (lat, lon) of the leg end

        Returns:
            All alternatives OSRM returned, in OSRM's order
        """
        coordinates = self.format_coordinates([start, end])
        url = f"{self.base_url}/route/v1/{self.profile}/{coordinates}"

        try:
            response = requests.get(
                url,
                params={
                    "alternatives": "true",
                    "overview": "full",
                    "geometries": "geojson",
                },
                timeout=self.timeout
            )
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"OSRM request failed: {e}")
            raise DirectionsError(f"OSRM request failed: {e}") from e

        if not isinstance(data, dict):
            logger.error(f"Unexpected OSRM response: {data!r}")
            raise DirectionsError("OSRM returned an unexpected response")

        if data.get("code") != "Ok":
            message = data.get("message", data.get("code", "Unknown error"))
            logger.error(f"OSRM error: {message}")
            raise DirectionsError(f"OSRM error: {message}")

        try:
            routes = [
                Route(
                    distance=float(item["distance"]),
                    duration=float(item["duration"]),
                    # GeoJSON positions are [lon, lat]
                    coordinates=[(lat, lon) for lon, lat in item["geometry"]["coordinates"]],
                )
                for item in data.get("routes") or []
            ]
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed OSRM route: {e!r}")
            raise DirectionsError(f"Malformed OSRM route: {e!r}") from e

        if not routes:
            raise DirectionsError("OSRM returned no routes")

        logger.debug(f"OSRM returned {len(routes)} alternatives")
        return routes


def _load_walk_graph(start: LatLon, end: LatLon, network_type: str,
                     buffer_m: float) -> nx.MultiDiGraph:
    """Fetch a pedestrian graph around the midpoint of a leg."""
    center = ((start[0] + end[0]) / 2, (start[1] + end[1]) / 2)
    radius = haversine_distance(start[0], start[1], end[0], end[1]) / 2 + buffer_m

    logger.info(f"Fetching {network_type} network within {radius:.0f} m of {center}")
    return ox.graph_from_point(center, dist=radius, network_type=network_type, simplify=True)


class GraphDirections:
    """Walking alternatives from k shortest paths on an OSM pedestrian graph."""

    def __init__(self, network_type: str = OSM_NETWORK_TYPE, k: int = GRAPH_ALTERNATIVES,
                 buffer_m: float = GRAPH_BUFFER_M,
                 graph_loader: Callable[..., nx.MultiDiGraph] = _load_walk_graph):
        if k < 1:
            raise ValueError("k must be at least 1")

        self.network_type = network_type
        self.k = k
        self.buffer_m = buffer_m
        self.graph_loader = graph_loader

    def request_routes(self, start: LatLon, end: LatLon) -> List[Route]:
        try:
            G = self.graph_loader(start, end, self.network_type, self.buffer_m)
        except Exception as e:
            logger.error(f"Error fetching pedestrian network: {e}")
            raise DirectionsError(f"Could not load walking network: {e}") from e

        if G.number_of_edges() == 0:
            raise DirectionsError("OSM returned an empty walking network")

        # snap termini
        try:
            orig = ox.distance.nearest_nodes(G, X=start[1], Y=start[0])
            dest = ox.distance.nearest_nodes(G, X=end[1], Y=end[0])
        except Exception as e:
            raise DirectionsError(f"Failed to snap points to the network: {e}") from e

        try:
            paths = list(ox.routing.k_shortest_paths(G, orig, dest, self.k, weight="length"))
        except (nx.NetworkXNoPath, nx.NodeNotFound) as e:
            raise DirectionsError("No walking path between the points") from e

        routes = []
        for path in paths:
            distance = nx.path_weight(G, path, weight="length")
            routes.append(Route(
                distance=float(distance),
                duration=calculate_walking_time(float(distance), WALKING_SPEED_MPS) * 60,
                coordinates=[(G.nodes[n]["y"], G.nodes[n]["x"]) for n in path],
            ))

        if not routes:
            raise DirectionsError("No walking path between the points")

        logger.debug(f"Found {len(routes)} alternatives on the walking graph")
        return routes


def get_directions_client(backend: Optional[str] = None) -> DirectionsClient:
    """
    Create the directions client selected in config.

    Args:
        backend: 'osrm' or 'graph' (default: DIRECTIONS_BACKEND)

    Returns:
        OSRMDirections or GraphDirections instance
    """
    backend = (backend or DIRECTIONS_BACKEND).lower()

    if backend == 'osrm':
        return OSRMDirections()
    elif backend == 'graph':
        return GraphDirections()
    else:
        raise ValueError(f"Unknown directions backend: {backend!r}")
