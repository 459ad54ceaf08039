from src.core.models import Coordinate
from src.etl import transform


def test_join_address_uses_present_parts_in_order():
    tags = {
        "addr:street": "Rue de Rivoli",
        "addr:city": "Paris",
        "addr:postcode": "75001",
        "addr:country": "FR",
        "addr:state": "",
    }
    assert transform.join_address(tags, "fallback") == "Rue de Rivoli, Paris, 75001, FR"


def test_join_address_falls_back_to_label():
    assert transform.join_address({}, "Paris, France") == "Paris, France"


def test_to_candidate_node_with_tags():
    element = {
        "type": "node",
        "lat": 48.85,
        "lon": 2.35,
        "tags": {"name": "Hôtel-Dieu", "amenity": "hospital", "healthcare": "hospital", "addr:city": "Paris"},
    }

    candidate = transform.to_candidate(element, "Paris, France")

    assert candidate.name == "Hôtel-Dieu"
    assert candidate.type == "hospital"
    assert candidate.specialties == ["hospital"]
    assert candidate.address == "Paris"
    assert candidate.coordinate == Coordinate(48.85, 2.35)


def test_to_candidate_way_uses_center_and_defaults():
    element = {"type": "way", "center": {"lat": 10.0, "lon": 20.0}}

    candidate = transform.to_candidate(element, "Somewhere")

    assert candidate.name == "Unknown Facility"
    assert candidate.type == "Unknown"
    assert candidate.specialties == []
    assert candidate.address == "Somewhere"
    assert candidate.coordinate == Coordinate(10.0, 20.0)


def test_to_candidate_without_coordinates():
    candidate = transform.to_candidate({"type": "relation", "tags": {"name": "Clinic"}}, "label")
    assert candidate.coordinate is None


def test_element_coordinate_keeps_zero_values():
    assert transform.element_coordinate({"lat": 0.0, "lon": 0.0}) == Coordinate(0.0, 0.0)


def test_element_coordinate_rejects_garbage():
    assert transform.element_coordinate({"lat": "north", "lon": "east"}) is None


def test_to_candidate_tolerates_malformed_center_and_tags():
    element = {"type": "way", "center": [10.0, 20.0], "tags": "hospital"}

    candidate = transform.to_candidate(element, "label")

    assert candidate.coordinate is None
    assert candidate.name == "Unknown Facility"
    assert candidate.address == "label"
