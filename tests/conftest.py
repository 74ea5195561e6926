"""
Shared pytest fixtures and utilities for testing
"""

import pytest

from runaround.core.config import RouterConfig
from runaround.core.models import Rectangle, Room


@pytest.fixture
def room():
    """400 x 400 room used by most layouts"""
    return Room(width=400, height=400)


@pytest.fixture
def rect_a():
    """Rectangle on the left edge of the room"""
    return Rectangle(id='A', x=0, y=150, width=100, height=60)


@pytest.fixture
def rect_b():
    """Rectangle on the right edge of the room, level with A"""
    return Rectangle(id='B', x=300, y=150, width=100, height=60)


@pytest.fixture
def rect_c():
    """Obstacle standing between A and B across their midline"""
    return Rectangle(id='C', x=175, y=100, width=50, height=200)


@pytest.fixture
def wall():
    """Obstacle spanning the full room height between A and B"""
    return Rectangle(id='W', x=180, y=0, width=40, height=400)


@pytest.fixture
def coarse_config():
    """Single coarse rung plus one finer attempt, keeps searches small"""
    return RouterConfig({
        'routing': {
            'ladder': [{'cell_size': 20, 'margin': 4}],
            'final_attempt': {'cell_size': 10, 'margin': 2},
        }
    })


@pytest.fixture
def project_dict():
    """Project file content with one routable, one manual and one unresolved path"""
    return {
        'version': 1,
        'room': {'width': 400, 'height': 400},
        'rects': [
            {'id': 'A', 'name': 'Reception', 'x': 0, 'y': 150, 'width': 100, 'height': 60},
            {'id': 'B', 'name': 'Storage', 'x': 300, 'y': 150, 'width': 100, 'height': 60, 'color': '#fca5a5'},
        ],
        'paths': [
            {
                'id': 'p1',
                'from': {'rectId': 'A', 'side': 'right'},
                'to': {'rectId': 'B', 'side': 'left'},
                'points': [],
                'fields': {'description': 'Delivery', 'knackpunkt': 'Narrow door'},
                'createdAt': 1700000000000,
            },
            {
                'id': 'p2',
                'from': {'rectId': 'B', 'side': 'top'},
                'to': {'rectId': 'A', 'side': 'top'},
                'points': [350, 150, 350, 50, 50, 50, 50, 150],
                'isManuallyEdited': True,
            },
            {
                'id': 'p3',
                'from': {'rectId': 'A', 'side': 'bottom'},
                'to': {'rectId': 'Z', 'side': 'top'},
                'points': [],
            },
        ],
        'pathOrder': ['p1', 'p2', 'p3'],
        'overlapSpacing': 8,
    }


def segment_list(points):
    """Consecutive vertex pairs of a flat coordinate list"""
    vertices = [(points[i], points[i + 1]) for i in range(0, len(points) - 1, 2)]
    return list(zip(vertices, vertices[1:]))


def assert_orthogonal(points):
    """Assert that every segment of a flat coordinate list is axis-aligned"""
    for (x1, y1), (x2, y2) in segment_list(points):
        assert x1 == x2 or y1 == y2, f"Diagonal segment ({x1}, {y1}) -> ({x2}, {y2}) in {points}"


def assert_in_room(points, room):
    """Assert that every vertex lies inside the room"""
    for i in range(0, len(points), 2):
        assert 0 <= points[i] <= room.width and 0 <= points[i + 1] <= room.height, \
            f"Vertex ({points[i]}, {points[i + 1]}) outside room {room}"


@pytest.fixture
def route_checks():
    """Assertion helpers for routed paths, shared through a fixture"""
    class Checks:
        orthogonal = staticmethod(assert_orthogonal)
        in_room = staticmethod(assert_in_room)
        segments = staticmethod(segment_list)
    return Checks
