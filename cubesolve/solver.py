#Layer-by-layer solver: seven steps, each keeping the work of the earlier ones intact.
#Every step turns the cube and returns its cleaned up commands. Loops are capped, so a
#cube that cannot be reached by turning ends in a partial result.

import logging, typing, enum
from . import log, moves
from .state import Cubie, Face
from .vector import Vector, X, Y, Z, NEG_X, NEG_Y, NEG_Z

#Recursion depth of the per-cubie steps
MAX_DEPTH = 10
#Quarter turns tried when lining a cubie up by turning a single face
MAX_TURNS = 4
#Attempts of the bottom edge three-cycle
MAX_CYCLES = 5

TOP_EDGES = [Vector(0, 1, 1), Vector(1, 1, 0), Vector(0, 1, -1), Vector(-1, 1, 0)]
TOP_CORNERS = [Vector(-1, 1, -1), Vector(-1, 1, 1), Vector(1, 1, -1), Vector(1, 1, 1)]
MIDDLE_EDGES = [Vector(-1, 0, -1), Vector(-1, 0, 1), Vector(1, 0, -1), Vector(1, 0, 1)]
BOTTOM_CORNERS = [Vector(-1, -1, -1), Vector(-1, -1, 1), Vector(1, -1, -1), Vector(1, -1, 1)]
BOTTOM_EDGES = [Vector(-1, -1, 0), Vector(0, -1, 1), Vector(1, -1, 0), Vector(0, -1, -1)]

def on_lower(cubie: Cubie) -> bool: return cubie.posn.y == -1
def on_middle(cubie: Cubie) -> bool: return cubie.posn.y == 0
def on_upper(cubie: Cubie) -> bool: return cubie.posn.y == 1

def blue_face_up(cubie: Cubie) -> bool: return cubie.Y == Y
def blue_face_down(cubie: Cubie) -> bool: return cubie.Y == NEG_Y
def blue_face_sideways(cubie: Cubie) -> bool: return not blue_face_up(cubie) and not blue_face_down(cubie)

class Case(enum.Enum):
    #Where a top or middle layer cubie is relative to its slot
    SOLVED = enum.auto()
    LOWER_DOWN = enum.auto()
    LOWER_SIDEWAYS = enum.auto()
    MIDDLE = enum.auto()
    UPPER_UP = enum.auto()
    UPPER_SIDEWAYS = enum.auto()
    #Blue face pointing the wrong way out of its layer, cannot happen on a valid cube
    UNKNOWN = enum.auto()

    @staticmethod
    def classify(cubie: Cubie) -> "Case":
        if cubie.is_home and blue_face_up(cubie): return Case.SOLVED
        if on_lower(cubie):
            if blue_face_down(cubie): return Case.LOWER_DOWN
            if blue_face_sideways(cubie): return Case.LOWER_SIDEWAYS
            return Case.UNKNOWN
        if on_middle(cubie): return Case.MIDDLE
        if blue_face_up(cubie): return Case.UPPER_UP
        if blue_face_sideways(cubie): return Case.UPPER_SIDEWAYS
        return Case.UNKNOWN

def _turn_until(cube: "Cube", cmd: str, done: typing.Callable[[], bool], limit: int = MAX_TURNS) -> str:
    result = ""
    for _ in range(limit):
        if done(): break
        result += cube.rotate(cmd)
    return result

def _turn_at_least_once(cube: "Cube", cmd: str, done: typing.Callable[[], bool], limit: int = MAX_TURNS) -> str:
    result = cube.rotate(cmd)
    for _ in range(limit - 1):
        if done(): break
        result += cube.rotate(cmd)
    return result

def _depth_exceeded(step: str, cubie: Cubie):
    log.LOGGER.log(logging.WARNING, f"{step}: giving up on {cubie!r} after {MAX_DEPTH} steps")

def _half_turn_down(posn: Vector) -> str:
    #Side face turned twice to swap a top edge with the bottom edge below it
    if posn.x == -1: return "gg"
    if posn.x == 1: return "yy"
    if posn.z == 1: return "oo"
    return "ww"

def fix_top_edge(cube: "Cube", cubie: Cubie) -> str:
    result = ""

    for _ in range(MAX_DEPTH + 1):
        case = Case.classify(cubie)

        if case == Case.SOLVED:
            return result

        elif case == Case.LOWER_DOWN:
            #Line it up under its home, then turn it over into place
            home = cubie.home_posn
            result += _turn_until(cube, "R", lambda: cubie.posn.x == home.x and cubie.posn.z == home.z)
            return result + cube.rotate(_half_turn_down(cubie.posn))

        elif case == Case.UPPER_UP:
            #Wrong slot, send it down to the bottom face down
            result += cube.rotate(_half_turn_down(cubie.posn))

        elif case == Case.MIDDLE:
            #Turn the top so its home is above, lift it up, then turn the top back
            center = cube.find_cubie(cubie.posn - cubie.Y)
            dest = Vector(center.posn.x, 1, center.posn.z)
            home_cubie = cube.find_cubie(cubie.home_posn)

            move1 = _turn_until(cube, "b", lambda: home_cubie.posn == dest)
            result += move1 + _turn_until(cube, center.color.value, lambda: on_upper(cubie))
            return result + cube.reverse(move1)

        elif case == Case.UPPER_SIDEWAYS:
            #Push it down into the middle layer
            center = cube.find_home_cubie(Vector(cubie.posn.x, 0, cubie.posn.z))
            result += cube.rotate(center.color.value)

        elif case == Case.LOWER_SIDEWAYS:
            #Get it under its home, then lift it into the middle layer
            dest = Vector(cubie.home_posn.x, -1, cubie.home_posn.z)
            result += _turn_until(cube, "r", lambda: cubie.posn == dest)

            center = cube.find_cubie(dest + Y)
            result += cube.rotate(center.color.value)

        else:
            return result

    _depth_exceeded("fix_top_edge", cubie)
    return result

def lower_corner_four_banger_up(cube: "Cube", cubie: Cubie) -> str:
    #Inserts a bottom corner into the top slot above it, its blue face must not point down
    side_center = cube.find_cubie(Vector(cubie.posn.x, 0, cubie.posn.z) - cubie.Y)
    ccw = side_center.color.value
    cw = moves.other_color(ccw)

    cube.rotate("r")
    if cubie.posn.x == side_center.posn.x or cubie.posn.z == side_center.posn.z:
        cube.rotate("RR")
        return "R" + cube.rotate(cw + "r" + ccw)

    return "r" + cube.rotate(ccw + "R" + cw)

#Side center used to take a top corner down, keyed by the corner's position
_TOP_CORNER_LEVERS = {
    Vector(-1, 1,  1): Vector( 0, 0,  1),
    Vector(-1, 1, -1): Vector(-1, 0,  0),
    Vector( 1, 1, -1): Vector( 0, 0, -1),
    Vector( 1, 1,  1): Vector( 1, 0,  0)
}

#Side center used to twist a bottom corner up into its slot
_BOTTOM_CORNER_LEVERS = {
    Vector(-1, -1,  1): Vector(-1, 0,  0),
    Vector(-1, -1, -1): Vector( 0, 0, -1),
    Vector( 1, -1, -1): Vector( 1, 0,  0),
    Vector( 1, -1,  1): Vector( 0, 0,  1)
}

def fix_top_corner(cube: "Cube", cubie: Cubie) -> str:
    result = ""

    for _ in range(MAX_DEPTH + 1):
        case = Case.classify(cubie)

        if case == Case.SOLVED:
            return result

        elif case == Case.LOWER_SIDEWAYS:
            home = cubie.home_posn
            result += _turn_until(cube, "r", lambda: cubie.posn.x == home.x and cubie.posn.z == home.z)
            return result + lower_corner_four_banger_up(cube, cubie)

        elif case == Case.UPPER_UP:
            #Wrong slot, take it down with the blue face sideways
            center = cube.find_cubie(_TOP_CORNER_LEVERS[cubie.posn])
            result += cube.rotate(center.color.value) + cube.rotate("R") + cube.rotate(moves.other_color(center.color.value))

        elif case == Case.UPPER_SIDEWAYS:
            #Down the face blue points out of, move the bottom out of the way, and back up
            my_center = cube.find_cubie(cubie.Y)
            dest = Vector(cubie.posn.x, -1, cubie.posn.z)

            move1 = _turn_until(cube, my_center.color.value, lambda: cubie.posn == dest)
            result += move1 + cube.rotate("rr") + cube.reverse(move1)

        elif case == Case.LOWER_DOWN:
            dest = Vector(cubie.home_posn.x, -1, cubie.home_posn.z)
            result += _turn_until(cube, "r", lambda: cubie.posn == dest)

            #Into its slot with the blue face sideways
            center = cube.find_cubie(_BOTTOM_CORNER_LEVERS[cubie.posn])
            result += (
                cube.rotate("R") +
                cube.rotate(moves.other_color(center.color.value)) +
                cube.rotate("r") +
                cube.rotate(center.color.value)
            )

        else:
            return result

    _depth_exceeded("fix_top_corner", cubie)
    return result

#Middle edge sitting on the bottom layer with one face over the matching center,
#keyed by (position, X axis, Z axis). Inserting it is the commutator of the two
#sequences.
_MIDDLE_INSERTIONS: typing.Dict[typing.Tuple[Vector, Vector, Vector], typing.Tuple[str, str]] = {
    (Vector( 1, -1,  0), X, NEG_Y): ("W i y ", "R"),
    (Vector( 1, -1,  0), X, Y):     ("o I Y ", "r"),
    (Vector( 0, -1,  1), Y, Z):     ("Y i o ", "R"),
    (Vector( 0, -1,  1), NEG_Y, Z): ("g I O ", "r"),
    (Vector(-1, -1,  0), X, Y):     ("O i g ", "R"),
    (Vector(-1, -1,  0), X, NEG_Y): ("w I G ", "r"),
    (Vector( 0, -1, -1), NEG_Y, Z): ("G i w ", "R"),
    (Vector( 0, -1, -1), Y, Z):     ("y I W ", "r")
}

#Knocks a cubie out of a middle slot down to the bottom layer
_MIDDLE_EJECTIONS = {
    Vector(-1, 0, -1): "yIW r wiY R",
    Vector(-1, 0,  1): "wIG r giW R",
    Vector( 1, 0, -1): "oIY r yiO R",
    Vector( 1, 0,  1): "gIO r oiG R"
}

def fix_middle(cube: "Cube", cubie: Cubie) -> str:
    result = ""

    for _ in range(MAX_DEPTH + 1):
        if cubie.is_home and blue_face_up(cubie):
            return result

        if on_lower(cubie):
            for _ in range(MAX_TURNS):
                seqs = _MIDDLE_INSERTIONS.get((cubie.posn, cubie.X, cubie.Z))
                if seqs:
                    start_seq, top_seq = seqs
                    return result + (
                        cube.rotate(start_seq) +
                        cube.rotate(top_seq) +
                        cube.rotate(moves.reverse(start_seq)) +
                        cube.rotate(moves.reverse(top_seq))
                    )

                result += cube.rotate("r")

            log.LOGGER.log(logging.WARNING, f"fix_middle: no insertion found for {cubie!r}")
            return result

        elif on_middle(cubie):
            result += cube.rotate(_MIDDLE_EJECTIONS[cubie.posn])

        else:
            return result

    _depth_exceeded("fix_middle", cubie)
    return result

def _home_count(cube: "Cube", slots: typing.Iterable[Vector]) -> int:
    return sum(1 for v in slots if cube.find_cubie(v).is_home)

def _shared_side_center(cube: "Cube", c1: Cubie, c2: Cubie) -> typing.Optional[Cubie]:
    if c1.posn.x == 1 and c2.posn.x == 1: return cube.find_cubie(Vector(1, 0, 0))
    if c1.posn.x == -1 and c2.posn.x == -1: return cube.find_cubie(Vector(-1, 0, 0))
    if c1.posn.z == -1 and c2.posn.z == -1: return cube.find_cubie(Vector(0, 0, -1))
    if c1.posn.z == 1 and c2.posn.z == 1: return cube.find_cubie(Vector(0, 0, 1))
    return None

def rotate_three_with_middle(cube: "Cube", c1: Cubie, c2: Cubie, c3: Cubie) -> str:
    #c2 must share a side face with both c1 and c3
    c1c2_face = _shared_side_center(cube, c1, c2)
    c2c3_face = _shared_side_center(cube, c2, c3)
    across_face = Face.from_direction(c2c3_face.posn).opposite

    across1 = _turn_at_least_once(cube, across_face.color.value, lambda: c1.posn.y == -1)
    down1 = _turn_at_least_once(cube, c1c2_face.color.value, lambda: c2.posn.y == -1)

    whole_move1 = (
        across1 + down1 +
        cube.rotate(moves.reverse(across1)) +
        cube.rotate(moves.reverse(down1))
    )

    over1 = _turn_at_least_once(cube, c2c3_face.color.value, lambda: c3.posn.y == -1)

    return (
        whole_move1 + over1 +
        cube.rotate(moves.reverse(whole_move1)) +
        cube.rotate(moves.reverse(over1))
    )

def rotate_three(cube: "Cube", c1: Cubie, c2: Cubie, c3: Cubie, in_place: Cubie) -> str:
    middle = cube.find_cubie(Vector(-in_place.posn.x, -1, -in_place.posn.z))

    if middle is c1: return rotate_three_with_middle(cube, c2, middle, c3)
    if middle is c2: return rotate_three_with_middle(cube, c1, middle, c3)
    return rotate_three_with_middle(cube, c1, middle, c2)

def fix_one(cube: "Cube") -> str:
    c1 = cube.find_cubie(Vector(-1, -1, -1))
    c2 = cube.find_cubie(Vector(-1, -1, 1))
    c3 = cube.find_cubie(Vector(1, -1, 1))
    return rotate_three_with_middle(cube, c1, c2, c3)

def _fix_bottom_corner_positions(cube: "Cube") -> str:
    result = ""

    #Turn the bottom until at least one corner is home
    home_count = _home_count(cube, BOTTOM_CORNERS)
    for _ in range(MAX_TURNS):
        if home_count != 0: break
        result += cube.rotate("r")
        home_count = _home_count(cube, BOTTOM_CORNERS)

    if home_count == 2:
        result += cube.rotate("r")
        home_count = _home_count(cube, BOTTOM_CORNERS)

    #Three home corners cannot happen, the fourth would be home too
    for _ in range(MAX_DEPTH):
        if home_count == 4: break

        if home_count == 1:
            c1, c2, c3, c4 = (cube.find_cubie(v) for v in BOTTOM_CORNERS)

            if c1.is_home: result += rotate_three(cube, c2, c3, c4, c1)
            elif c2.is_home: result += rotate_three(cube, c1, c3, c4, c2)
            elif c3.is_home: result += rotate_three(cube, c1, c2, c4, c3)
            else: result += rotate_three(cube, c1, c2, c3, c4)
        else:
            result += fix_one(cube)

        home_count = _home_count(cube, BOTTOM_CORNERS)

    if home_count != 4:
        log.LOGGER.log(logging.WARNING, f"fix_bottom_corner_positions: {home_count} corners home after {MAX_DEPTH} cycles")

    return result

def rotate_green_red_orange_corner(cube: "Cube", c1: Cubie) -> str:
    #Twists bottom corner c1 in the green/red/orange slot, then turns the bottom back
    c1_rotate = _turn_until(cube, "r", lambda: c1.posn == Vector(-1, -1, 1))
    result = c1_rotate

    if -c1.Y == NEG_X: result += cube.rotate("BObo BObo")
    elif -c1.Y == Z: result += cube.rotate("OBob OBob")

    return result + cube.rotate(moves.reverse(c1_rotate))

def _fix_bottom_corner_orientations(cube: "Cube") -> str:
    return "".join(rotate_green_red_orange_corner(cube, cube.find_home_cubie(v)) for v in BOTTOM_CORNERS)

def fix_left(cube: "Cube", c1: Cubie) -> str:
    #Three-cycles bottom edges in the red/orange slot, c1 being the middle one
    c1_rotate = _turn_until(cube, "r", lambda: c1.posn == Vector(0, -1, 1), MAX_CYCLES)
    result = c1_rotate + cube.rotate("O")

    move = "Yi o "
    return result + (
        cube.rotate(move) +
        cube.rotate("rr") +
        cube.rotate(moves.reverse(move)) +
        cube.rotate("rr o") +
        cube.rotate(moves.reverse(c1_rotate))
    )

def _fix_bottom_edge_positions(cube: "Cube") -> str:
    result = ""

    for _ in range(MAX_CYCLES):
        if _home_count(cube, BOTTOM_EDGES) != 0: break
        result += fix_left(cube, cube.find_cubie(BOTTOM_EDGES[0]))

    if _home_count(cube, BOTTOM_EDGES) == 4: return result

    #One edge is home now, cycling the other three fixes them all
    in_place = next((c for c in map(cube.find_cubie, BOTTOM_EDGES) if c.is_home), None)
    if in_place is None:
        log.LOGGER.log(logging.WARNING, f"fix_bottom_edge_positions: no edge home after {MAX_CYCLES} cycles")
        return result

    middle_posn = Vector(-in_place.posn.x, -1, -in_place.posn.z)
    for _ in range(MAX_CYCLES):
        if _home_count(cube, BOTTOM_EDGES) == 4: break
        result += fix_left(cube, cube.find_cubie(middle_posn))

    if _home_count(cube, BOTTOM_EDGES) != 4:
        log.LOGGER.log(logging.WARNING, f"fix_bottom_edge_positions: edges still out of place after {MAX_CYCLES} cycles")

    return result

def fix_bottom_edge_orientation(cube: "Cube", cubie: Cubie) -> str:
    into_posn = _turn_until(cube, "r", lambda: cubie.posn == Vector(0, -1, 1))
    return into_posn + cube.rotate(" oiG r Wiy R ") + cube.rotate(moves.reverse(into_posn))

def reverse_bottom_edge_orientation(cube: "Cube", cubie: Cubie) -> str:
    into_posn = _turn_until(cube, "r", lambda: cubie.posn == Vector(1, -1, 0))
    return into_posn + cube.rotate(" YIw R gIO r ") + cube.reverse(into_posn)

def _fix_bottom_edge_orientations(cube: "Cube") -> str:
    result = ""

    #Flips come in pairs: the first of a pair uses one sequence, the second the other
    forward = True
    for cubie in [cube.find_cubie(v) for v in BOTTOM_EDGES]:
        if blue_face_up(cubie): continue

        if forward: result += fix_bottom_edge_orientation(cube, cubie)
        else: result += reverse_bottom_edge_orientation(cube, cubie)
        forward = not forward

    return result

def _run_step(name: str, step: typing.Callable[[], str]) -> str:
    result = moves.cleanup(step())
    log.LOGGER.log(logging.DEBUG, f"{name}: {result}")
    return result

def fix_top_edges(cube: "Cube") -> str:
    return _run_step("fix_top_edges", lambda: "".join(fix_top_edge(cube, cube.find_home_cubie(v)) for v in TOP_EDGES))

def fix_top_corners(cube: "Cube") -> str:
    return _run_step("fix_top_corners", lambda: "".join(fix_top_corner(cube, cube.find_home_cubie(v)) for v in TOP_CORNERS))

def fix_middles(cube: "Cube") -> str:
    return _run_step("fix_middles", lambda: "".join(fix_middle(cube, cube.find_home_cubie(v)) for v in MIDDLE_EDGES))

def fix_bottom_corner_positions(cube: "Cube") -> str:
    return _run_step("fix_bottom_corner_positions", lambda: _fix_bottom_corner_positions(cube))

def fix_bottom_corner_orientations(cube: "Cube") -> str:
    return _run_step("fix_bottom_corner_orientations", lambda: _fix_bottom_corner_orientations(cube))

def fix_bottom_edge_positions(cube: "Cube") -> str:
    return _run_step("fix_bottom_edge_positions", lambda: _fix_bottom_edge_positions(cube))

def fix_bottom_edge_orientations(cube: "Cube") -> str:
    return _run_step("fix_bottom_edge_orientations", lambda: _fix_bottom_edge_orientations(cube))

STEPS: typing.List[typing.Tuple[str, typing.Callable[["Cube"], str]]] = [
    ("top edges", fix_top_edges),
    ("top corners", fix_top_corners),
    ("middle edges", fix_middles),
    ("bottom corner positions", fix_bottom_corner_positions),
    ("bottom corner orientations", fix_bottom_corner_orientations),
    ("bottom edge positions", fix_bottom_edge_positions),
    ("bottom edge orientations", fix_bottom_edge_orientations)
]

def solve_steps(cube: "Cube") -> typing.List[typing.Tuple[str, str]]:
    return [(name, step(cube)) for name, step in STEPS]

def solve_cube(cube: "Cube") -> str:
    return moves.cleanup("".join(cmds for _, cmds in solve_steps(cube)))
