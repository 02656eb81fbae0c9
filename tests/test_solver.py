import logging, random
import pytest

import cubesolve
from cubesolve import Cube, Cubie, solver
from cubesolve.vector import Vector

def solved(cube: Cube, homes) -> bool:
    return all(cube.find_home_cubie(v).is_solved for v in homes)

def home(cube: Cube, homes) -> bool:
    return all(cube.find_home_cubie(v).is_home for v in homes)

def check_replay(scramble: Cube, solution: str):
    replay = scramble.copy()
    replay.rotate(solution)
    assert replay.is_solved

def test_solved_cube_needs_nothing(cube):
    assert cube.solve() == ""
    assert cube.is_solved

def test_rgb(cube):
    cube.rotate("rgb")
    scramble = cube.copy()

    solution = cube.solve()
    assert solution
    assert cube.is_solved
    check_replay(scramble, solution)

@pytest.mark.parametrize("cmds", ["R", "b", "i", "jK", "yyoo", "RGBOYW", "OBob OBob", "rgbywoRGBYWO"])
def test_short_scrambles(cube, cmds):
    cube.rotate(cmds)
    scramble = cube.copy()

    solution = cube.solve()
    assert cube.is_solved
    check_replay(scramble, solution)

def test_random_scrambles(scrambled):
    scramble = scrambled.copy()

    solution = scrambled.solve()
    assert scrambled.is_solved
    assert solution == cubesolve.cleanup(solution)
    check_replay(scramble, solution)

def test_long_scramble(scrambled_cube):
    cube = scrambled_cube(1234, 200)
    scramble = cube.copy()
    check_replay(scramble, cube.solve())

def test_injected_scramble(scrambled_cube):
    turned = scrambled_cube(99)

    cube = Cube()
    for c in turned:
        cubie = Cubie(*c.home_posn)
        cubie.update(*c.posn, *c.X, *c.Y)
        cube.update_cubie(cubie)

    cube.solve()
    assert cube.is_solved

def test_steps_keep_earlier_work(scrambled):
    scramble = scrambled.copy()
    cube = scrambled

    solution = cube.fix_top_edges()
    assert solved(cube, solver.TOP_EDGES)

    solution += cube.fix_top_corners()
    assert solved(cube, solver.TOP_EDGES + solver.TOP_CORNERS)

    solution += cube.fix_middles()
    top_two = solver.TOP_EDGES + solver.TOP_CORNERS + solver.MIDDLE_EDGES
    assert solved(cube, top_two)

    solution += cube.fix_bottom_corner_positions()
    assert solved(cube, top_two)
    assert home(cube, solver.BOTTOM_CORNERS)

    solution += cube.fix_bottom_corner_orientations()
    assert solved(cube, top_two + solver.BOTTOM_CORNERS)

    solution += cube.fix_bottom_edge_positions()
    assert solved(cube, top_two + solver.BOTTOM_CORNERS)
    assert home(cube, solver.BOTTOM_EDGES)

    solution += cube.fix_bottom_edge_orientations()
    assert cube.is_solved

    check_replay(scramble, solution)

def test_steps_return_cleaned_commands(scrambled):
    for name, cmds in scrambled.solve_steps():
        assert cmds == cubesolve.cleanup(cmds), name
        assert " " not in cmds

def test_solve_steps_match_solve(scrambled_cube):
    a = scrambled_cube(5)
    b = a.copy()

    steps = a.solve_steps()
    assert [name for name, _ in steps] == [name for name, _ in solver.STEPS]
    assert cubesolve.cleanup("".join(cmds for _, cmds in steps)) == b.solve()

def test_step_on_solved_subset_is_noop(cube):
    cube.rotate("R")
    #Only the bottom layer is off, the top layer steps have nothing to do
    assert cube.fix_top_edges() == ""
    assert cube.fix_top_corners() == ""
    assert cube.fix_middles() == ""

def test_fix_top_edge_cases(cube):
    #Blue/orange edge flipped in place: top layer, blue face sideways
    cubie = Cubie(0, 1, 1)
    cubie.update(0, 1, 1, -1, 0, 0, 0, 0, 1)
    cube.update_cubie(cubie)
    assert solver.Case.classify(cubie) == solver.Case.UPPER_SIDEWAYS

    other = Cube()
    other.rotate("oo")
    assert solver.Case.classify(other.find_home_cubie(Vector(0, 1, 1))) == solver.Case.LOWER_DOWN
    other.rotate("oo")
    assert solver.Case.classify(other.find_home_cubie(Vector(0, 1, 1))) == solver.Case.SOLVED

    other.rotate("o")
    assert solver.Case.classify(other.find_home_cubie(Vector(0, 1, 1))) == solver.Case.MIDDLE

def test_cleanup_of_whole_solution_keeps_effect(scrambled_cube):
    cube = scrambled_cube(21)
    scramble = cube.copy()

    raw = "".join(cmds for _, cmds in cube.solve_steps())
    check_replay(scramble, raw)
    check_replay(scramble, cubesolve.cleanup(raw))

def test_lower_corner_insert():
    cube = Cube()
    #Drop the blue/orange/yellow corner to the bottom with the blue face sideways
    cube.rotate("y")
    corner = cube.find_home_cubie(Vector(1, 1, 1))
    assert corner.posn.y == -1 and solver.blue_face_sideways(corner)

    cube.rotate("RR")
    result = solver.fix_top_corner(cube, corner)
    assert corner.is_solved
    assert result

def swap(cube: Cube, a: Vector, b: Vector):
    ca, cb = cube.find_home_cubie(a), cube.find_home_cubie(b)
    ca.update(*b, 1, 0, 0, 0, 1, 0)
    cb.update(*a, 1, 0, 0, 0, 1, 0)

def flip_top_edge(cube: Cube):
    cube.find_home_cubie(Vector(0, 1, 1)).update(0, 1, 1, -1, 0, 0, 0, 0, 1)

def twist_top_corner(cube: Cube):
    cube.find_home_cubie(Vector(1, 1, 1)).update(1, 1, 1, 0, 0, 1, 1, 0, 0)

def swap_bottom_corners(cube: Cube): swap(cube, Vector(-1, -1, 1), Vector(1, -1, 1))
def swap_bottom_edges(cube: Cube): swap(cube, Vector(0, -1, 1), Vector(1, -1, 0))
def swap_top_edges(cube: Cube): swap(cube, Vector(0, 1, 1), Vector(0, 1, -1))

@pytest.mark.parametrize("breakage", [flip_top_edge, twist_top_corner, swap_bottom_corners, swap_bottom_edges, swap_top_edges])
@pytest.mark.parametrize("cmds", ["", "rgbOW", "ykIjbYo"])
def test_unreachable_cube_gives_up(cube, breakage, cmds):
    breakage(cube)
    cube.rotate(cmds)

    solution = cube.solve()
    assert isinstance(solution, str)
    assert solution == cubesolve.cleanup(solution)
    assert not cube.is_solved

@pytest.mark.parametrize("breakage", [swap_bottom_corners, swap_bottom_edges])
def test_unreachable_bottom_layer_warns(cube, caplog, breakage):
    breakage(cube)

    with caplog.at_level(logging.WARNING, logger="cubesolve"):
        cube.solve()
    assert "fix_bottom_" in caplog.text
    assert all(r.levelno == logging.WARNING for r in caplog.records)

def test_unreachable_bottom_edges_warn_in_edge_step(cube, caplog):
    swap_bottom_edges(cube)

    with caplog.at_level(logging.WARNING, logger="cubesolve"):
        assert cube.fix_top_edges() == ""
        assert cube.fix_top_corners() == ""
        assert cube.fix_middles() == ""
        assert cube.fix_bottom_corner_positions() == ""
        assert not caplog.records

        cube.fix_bottom_corner_orientations()
        cube.fix_bottom_edge_positions()
    assert "fix_bottom_edge_positions" in caplog.text

def test_depth_cap_warns(cube, caplog, monkeypatch):
    #Blue/orange edge in the blue/yellow slot, blue up: sending it down takes one pass
    cube.rotate("b")
    cubie = cube.find_home_cubie(Vector(0, 1, 1))
    assert solver.Case.classify(cubie) == solver.Case.UPPER_UP

    monkeypatch.setattr(solver, "MAX_DEPTH", 0)
    with caplog.at_level(logging.WARNING, logger="cubesolve"):
        assert solver.fix_top_edge(cube, cubie) == "yy"
    assert "fix_top_edge: giving up" in caplog.text
    assert not cubie.is_solved
