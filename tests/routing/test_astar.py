"""
Tests for A* pathfinding over grid cells
"""

import dataclasses
import heapq
import importlib

from hypothesis import given, strategies as st, settings

from runaround.core.models import Room
from runaround.routing.astar import Node, astar, manhattan_distance, reconstruct_path, step_cost
from runaround.routing.grid import GridCell, build_obstacle_grid

# The package re-exports the astar function under the submodule name
astar_module = importlib.import_module('runaround.routing.astar')


def count_turns(cells):
    """Number of direction changes along a cell path"""
    directions = [
        (b.x - a.x, b.y - a.y)
        for a, b in zip(cells, cells[1:])
    ]
    return sum(1 for d1, d2 in zip(directions, directions[1:]) if d1 != d2)


def assert_contiguous(cells):
    """Every step moves exactly one cell horizontally or vertically"""
    for a, b in zip(cells, cells[1:]):
        assert abs(a.x - b.x) + abs(a.y - b.y) == 1, f"Jump from {a} to {b}"


class TestCostModel:
    """Test suite for step costs and helpers"""

    def test_manhattan_distance(self):
        assert manhattan_distance(GridCell(0, 0), GridCell(3, -4)) == 7

    def test_first_move_is_not_a_turn(self):
        """Leaving the start never pays the turn penalty"""
        assert step_cost(None, (1, 0)) == 1

    def test_turn_penalty(self):
        assert step_cost((1, 0), (0, 1)) == 4
        assert step_cost((1, 0), (1, 0)) == 1
        assert step_cost((1, 0), (0, 1), base_cost=2, turn_penalty=5) == 7

    def test_nodes_order_by_cost_then_insertion(self):
        """Equal f-costs pop in insertion order"""
        early = Node(f_cost=5, order=1, g_cost=0, cell=GridCell(9, 9))
        late = Node(f_cost=5, order=2, g_cost=0, cell=GridCell(0, 0))
        cheap = Node(f_cost=4, order=3, g_cost=0, cell=GridCell(1, 1))
        assert sorted([late, cheap, early]) == [cheap, early, late]

    def test_reconstruct_path(self):
        a = Node(f_cost=0, order=0, g_cost=0, cell=GridCell(0, 0))
        b = Node(f_cost=0, order=1, g_cost=1, cell=GridCell(1, 0), parent=a)
        c = Node(f_cost=0, order=2, g_cost=2, cell=GridCell(2, 0), parent=b)
        assert reconstruct_path(c) == [GridCell(0, 0), GridCell(1, 0), GridCell(2, 0)]


class TestAStar:
    """Test suite for the search itself"""

    def test_straight_line(self):
        """Unobstructed cells on one row give a straight path"""
        path = astar(GridCell(0, 0), GridCell(5, 0), set(), 10, 10)

        assert path == [GridCell(x, 0) for x in range(6)]

    def test_start_equals_end(self):
        assert astar(GridCell(2, 2), GridCell(2, 2), set(), 10, 10) == [GridCell(2, 2)]

    def test_single_turn_preferred(self):
        """Diagonal displacement is covered with one bend"""
        path = astar(GridCell(0, 0), GridCell(3, 3), set(), 10, 10)

        assert path[0] == GridCell(0, 0)
        assert path[-1] == GridCell(3, 3)
        assert len(path) == 7
        assert count_turns(path) == 1

    def test_detour_around_wall(self):
        """A wall forces the path around its open end"""
        wall = {GridCell(3, y) for y in range(-5, 8)}
        path = astar(GridCell(0, 0), GridCell(6, 0), wall, 10, 10)

        assert path is not None
        assert path[0] == GridCell(0, 0)
        assert path[-1] == GridCell(6, 0)
        assert_contiguous(path)
        assert not any(cell in wall for cell in path)
        assert any(cell.x == 3 and cell.y >= 8 for cell in path)

    def test_enclosed_goal(self):
        """A goal boxed in on all sides is unreachable"""
        goal = GridCell(5, 5)
        box = {GridCell(4, 5), GridCell(6, 5), GridCell(5, 4), GridCell(5, 6)}

        assert astar(GridCell(0, 0), goal, box, 10, 10) is None

    def test_search_bounds(self):
        """The search never leaves the room grid plus its margin"""
        wall = {GridCell(3, y) for y in range(-2, 13)}
        assert astar(GridCell(0, 0), GridCell(6, 0), wall, 10, 10, search_margin=2) is None

        path = astar(GridCell(0, 0), GridCell(6, 0), wall, 10, 10, search_margin=3)
        assert path is not None
        assert min(cell.y for cell in path) >= -3

    def test_iteration_cap(self):
        """Search gives up once the iteration budget is spent"""
        assert astar(GridCell(0, 0), GridCell(5, 0), set(), 1, 1, iteration_factor=1) is None

    def test_stale_entries_do_not_spend_budget(self, monkeypatch):
        """Superseded heap entries are skipped without counting as iterations"""

        class StaleCopyHeap:
            """Pushes a costlier duplicate of every node next to the real one"""
            heappop = staticmethod(heapq.heappop)

            @staticmethod
            def heappush(heap, node):
                heapq.heappush(heap, node)
                heapq.heappush(heap, dataclasses.replace(node, g_cost=node.g_cost + 1000))

        monkeypatch.setattr(astar_module, 'heapq', StaleCopyHeap)

        # Six expansions along the row, budget 1 * 6 * 1
        path = astar(GridCell(0, 0), GridCell(5, 0), set(), 6, 1, search_margin=0, iteration_factor=1)

        assert path == [GridCell(x, 0) for x in range(6)]

    def test_obstacle_grid_as_blocked_set(self, room):
        """ObstacleGrid plugs in wherever a cell set does"""
        grid = build_obstacle_grid(room, [], margin=0, cell_size=10)
        path = astar(GridCell(0, 0), GridCell(40, 40), grid, 40, 40)

        assert path[0] == GridCell(0, 0)
        assert path[-1] == GridCell(40, 40)
        assert all(0 <= cell.x <= 40 and 0 <= cell.y <= 40 for cell in path)

    def test_deterministic(self):
        """Repeated searches return identical paths"""
        wall = {GridCell(4, y) for y in range(0, 9)}
        first = astar(GridCell(0, 4), GridCell(8, 4), wall, 10, 10)
        second = astar(GridCell(0, 4), GridCell(8, 4), wall, 10, 10)

        assert first == second


class TestAStarPropertyBased:
    """Property-based tests using Hypothesis"""

    @given(
        st.integers(min_value=0, max_value=15),
        st.integers(min_value=0, max_value=15),
        st.integers(min_value=0, max_value=15),
        st.integers(min_value=0, max_value=15),
        st.sets(st.tuples(st.integers(0, 15), st.integers(0, 15)), max_size=60),
    )
    @settings(max_examples=60, deadline=None)
    def test_property_paths_are_contiguous_and_free(self, sx, sy, ex, ey, obstacles):
        """Property: Any returned path is a chain of free neighbouring cells"""
        start = GridCell(sx, sy)
        end = GridCell(ex, ey)
        blocked = {GridCell(x, y) for x, y in obstacles} - {start, end}

        path = astar(start, end, blocked, 16, 16)

        if path is None:
            return
        assert path[0] == start
        assert path[-1] == end
        assert_contiguous(path)
        assert not any(cell in blocked for cell in path)
        assert len(path) - 1 >= manhattan_distance(start, end)
