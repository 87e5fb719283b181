"""
Unit tests for the route planner state and leg selection.

Run with: pytest tests/test_route_planner.py
"""

import pytest

import directions

from directions import DirectionsError, OSRMDirections, Route
from geocoding import Annotation, GeocodingError
from route_planner import RouteLeg, RoutePlanner, visible_coordinates

PLACES = {
    'Rynek': (51.1100, 17.0320),
    'Dworzec Główny': (51.0983, 17.0367),
    'Ostrów Tumski': (51.1141, 17.0465),
}


def fake_geocoder(text):
    if text not in PLACES:
        raise GeocodingError(f"Could not geocode {text!r}")
    lat, lon = PLACES[text]
    return Annotation(title=text, lat=lat, lon=lon)


class FakeDirections:
    """Returns two alternatives per leg; the second is shorter."""

    def __init__(self, fail_on=()):
        self.calls = []
        self.fail_on = set(fail_on)

    def request_routes(self, start, end):
        self.calls.append((start, end))
        if len(self.calls) - 1 in self.fail_on:
            raise DirectionsError("Route unavailable")
        return [
            Route(distance=1500.0, duration=1100.0, coordinates=[start, end]),
            Route(distance=1200.0, duration=900.0, coordinates=[start, end]),
        ]


@pytest.fixture
def planner():
    return RoutePlanner(geocoder=fake_geocoder, directions=FakeDirections())


class TestAddAndReset:
    """Tests for placing and clearing annotations."""

    def test_initial_state(self, planner):
        assert planner.annotations == ()
        assert planner.can_route is False
        assert planner.can_reset is False

    def test_add_keeps_order_and_title(self, planner):
        planner.add_address('Rynek')
        planner.add_address('Dworzec Główny')
        titles = [a.title for a in planner.annotations]
        assert titles == ['Rynek', 'Dworzec Główny']

    def test_route_enabled_after_two(self, planner):
        planner.add_address('Rynek')
        assert planner.can_route is False
        assert planner.can_reset is True
        planner.add_address('Dworzec Główny')
        assert planner.can_route is True

    def test_failed_geocode_leaves_state(self, planner):
        planner.add_address('Rynek')
        with pytest.raises(GeocodingError):
            planner.add_address('Nowhere')
        assert len(planner.annotations) == 1

    def test_reset_clears_everything(self, planner):
        for name in PLACES:
            planner.add_address(name)
        planner.build_route()
        planner.reset()
        assert planner.annotations == ()
        assert planner.overlays == []
        assert planner.can_reset is False
        assert planner.route_summary() is None


class TestBuildRoute:
    """Tests for pairwise leg requests."""

    def test_requires_two_annotations(self, planner):
        planner.add_address('Rynek')
        with pytest.raises(ValueError):
            planner.build_route()

    def test_consecutive_pairs_in_order(self, planner):
        for name in PLACES:
            planner.add_address(name)
        planner.build_route()

        coords = [PLACES[name] for name in PLACES]
        assert planner.directions.calls == [(coords[0], coords[1]), (coords[1], coords[2])]

    def test_picks_shortest_alternative(self, planner):
        planner.add_address('Rynek')
        planner.add_address('Ostrów Tumski')
        result = planner.build_route()

        assert result.ok
        assert len(result.legs) == 1
        assert result.legs[0].route.distance == 1200.0
        assert result.total_distance == 1200.0
        assert result.total_duration == 900.0

    def test_failed_leg_does_not_block_others(self):
        planner = RoutePlanner(geocoder=fake_geocoder, directions=FakeDirections(fail_on={0}))
        for name in PLACES:
            planner.add_address(name)
        result = planner.build_route()

        assert not result.ok
        assert [index for index, _ in result.failures] == [0]
        assert len(result.legs) == 1
        assert result.legs[0].start.title == 'Dworzec Główny'
        assert planner.overlays == result.legs

    def test_rebuild_replaces_overlays(self, planner):
        planner.add_address('Rynek')
        planner.add_address('Dworzec Główny')
        planner.build_route()
        planner.build_route()
        assert len(planner.overlays) == 1

    def test_visible_coordinates(self, planner):
        planner.add_address('Rynek')
        planner.add_address('Dworzec Główny')
        assert planner.visible_coordinates() == [PLACES['Rynek'], PLACES['Dworzec Główny']]

        planner.build_route()
        assert len(planner.visible_coordinates()) == 4
        assert planner.route_summary() == (1200.0, 900.0)


class TestMalformedDirections:
    """A bad directions payload surfaces as a failed leg, not a crash."""

    class Response:
        def __init__(self, payload):
            self.payload = payload

        def json(self):
            return self.payload

    def test_bad_leg_reported(self, monkeypatch):
        payloads = iter([
            {"code": "Ok", "routes": [{"distance": 1, "duration": 1}]},
            {"code": "Ok", "routes": [{"distance": 800.0, "duration": 600.0,
                                       "geometry": {"coordinates": [[17.0367, 51.0983],
                                                                    [17.0465, 51.1141]]}}]},
        ])
        monkeypatch.setattr(
            directions.requests, "get",
            lambda *args, **kwargs: self.Response(next(payloads))
        )
        planner = RoutePlanner(geocoder=fake_geocoder,
                               directions=OSRMDirections(base_url="http://osrm.test"))
        for name in PLACES:
            planner.add_address(name)

        result = planner.build_route()

        assert [index for index, _ in result.failures] == [0]
        assert len(result.legs) == 1
        assert result.legs[0].route.distance == 800.0

    @pytest.mark.parametrize("payload", [None, []])
    def test_non_object_response(self, monkeypatch, payload):
        monkeypatch.setattr(
            directions.requests, "get",
            lambda *args, **kwargs: self.Response(payload)
        )
        planner = RoutePlanner(geocoder=fake_geocoder,
                               directions=OSRMDirections(base_url="http://osrm.test"))
        planner.add_address('Rynek')
        planner.add_address('Ostrów Tumski')

        result = planner.build_route()

        assert not result.ok
        assert planner.overlays == []


class TestVisibleCoordinates:
    """Tests for the points the map is fitted to."""

    def test_pins_then_geometry(self):
        start = fake_geocoder('Rynek')
        end = fake_geocoder('Ostrów Tumski')
        leg = RouteLeg(start=start, end=end,
                       route=Route(500.0, 400.0, coordinates=[start.coordinate, (51.112, 17.04)]))

        assert visible_coordinates([start, end], [leg]) == [
            start.coordinate, end.coordinate, start.coordinate, (51.112, 17.04)
        ]

    def test_empty(self):
        assert visible_coordinates([], []) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
