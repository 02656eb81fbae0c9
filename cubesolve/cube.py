import logging, typing, itertools
from . import log, moves, solver
from .state import Cubie, Face
from .vector import Vector

class Cube:
    #Blue is up (+y), red down, orange front (+z), white back, yellow right (+x), green left
    cubies: typing.List[Cubie]

    _handlers: typing.List[typing.Callable[["Cube", moves.Turn], None]]

    def __init__(self):
        self.cubies = [Cubie(x, y, z) for x, y, z in itertools.product((-1, 0, 1), repeat=3)]
        self._handlers = []

    def register_handler(self, cb: typing.Callable[["Cube", moves.Turn], None]): self._handlers.append(cb)
    def unregister_handler(self, cb: typing.Callable[["Cube", moves.Turn], None]): self._handlers.remove(cb)

    def rotate_all(self, turn: moves.Turn):
        mat = turn.rot_matrix

        turned = 0
        for c in self.cubies:
            if turn.is_on_face(c.posn):
                c.rotate(mat)
                turned += 1
        if turned != 9:
            log.LOGGER.log(logging.WARNING, f"turn {turn} moved {turned} cubies instead of 9")

        for h in self._handlers: h(self, turn)

    def rotate(self, cmds: typing.Union[str, moves.Turn]) -> typing.Optional[str]:
        #Echoes the commands so callers can build up the solution text while turning
        if isinstance(cmds, moves.Turn):
            self.rotate_all(cmds)
            return None

        for turn in moves.expand(cmds): self.rotate_all(turn)
        return cmds

    def reverse(self, cmds: str) -> str: return self.rotate(moves.reverse(cmds))

    def update_cubie(self, cubie: Cubie):
        for i, c in enumerate(self.cubies):
            if c.id == cubie.id:
                log.LOGGER.log(logging.DEBUG, f"replacing cubie {c!r} with {cubie!r}")
                self.cubies[i] = cubie
                break

    def find_cubie(self, pos: Vector) -> typing.Optional[Cubie]:
        for c in self.cubies:
            if c.posn == pos: return c

        log.LOGGER.log(logging.WARNING, f"find_cubie failed on {Vector(*pos)}")
        return None

    def find_home_cubie(self, pos: Vector) -> typing.Optional[Cubie]:
        for c in self.cubies:
            if c.home_posn == pos: return c
        return None

    def solve(self) -> str: return solver.solve_cube(self)
    def solve_steps(self) -> typing.List[typing.Tuple[str, str]]: return solver.solve_steps(self)

    def fix_top_edges(self) -> str: return solver.fix_top_edges(self)
    def fix_top_corners(self) -> str: return solver.fix_top_corners(self)
    def fix_middles(self) -> str: return solver.fix_middles(self)
    def fix_bottom_corner_positions(self) -> str: return solver.fix_bottom_corner_positions(self)
    def fix_bottom_corner_orientations(self) -> str: return solver.fix_bottom_corner_orientations(self)
    def fix_bottom_edge_positions(self) -> str: return solver.fix_bottom_edge_positions(self)
    def fix_bottom_edge_orientations(self) -> str: return solver.fix_bottom_edge_orientations(self)

    def copy(self) -> "Cube":
        #Cubies keep their enumeration slot, so slots line up between cubes
        cube = Cube()
        for src, dst in zip(self.cubies, cube.cubies):
            dst.posn, dst.X, dst.Y, dst.Z = src.posn, src.X, src.Y, src.Z
        return cube

    @property
    def is_solved(self) -> bool: return all(c.is_solved for c in self.cubies)

    def __eq__(self, other):
        if not isinstance(other, Cube): return NotImplemented

        def frames(cube: "Cube"): return sorted((c.home_posn, c.posn, c.X, c.Y, c.Z) for c in cube.cubies)
        return frames(self) == frames(other)

    __hash__ = None

    def __getitem__(self, pos) -> typing.Optional[Cubie]: return self.find_cubie(Vector(*pos))

    def __iter__(self) -> typing.Iterator[Cubie]: return iter(self.cubies)

    def __str__(self):
        s = ""
        for f in Face:
            if len(s) > 0: s += " "
            for x, y, z in itertools.product((-1, 0, 1), repeat=3):
                if f.is_on_face(x, y, z):
                    s += self[x, y, z].get_face_color(f).value

        return s
