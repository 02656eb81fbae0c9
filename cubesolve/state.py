import typing, enum
from .vector import Vector, X, Y, Z, cross_product

class InvalidCubieError(ValueError): pass

class Color(enum.Enum):
    #The value doubles as the counter-clockwise turn command of the face with that color
    BLUE = 'b'
    RED = 'r'
    ORANGE = 'o'
    YELLOW = 'y'
    WHITE = 'w'
    GREEN = 'g'

class Face(enum.Enum):
    L = enum.auto()
    R = enum.auto()
    U = enum.auto()
    D = enum.auto()
    F = enum.auto()
    B = enum.auto()

    @property
    def direction(self) -> Vector: return {
        Face.L: Vector(-1,  0,  0),
        Face.R: Vector(+1,  0,  0),
        Face.U: Vector( 0, +1,  0),
        Face.D: Vector( 0, -1,  0),
        Face.F: Vector( 0,  0, +1),
        Face.B: Vector( 0,  0, -1)
    }[self]

    @property
    def color(self) -> Color: return {
        Face.L: Color.GREEN,
        Face.R: Color.YELLOW,
        Face.U: Color.BLUE,
        Face.D: Color.RED,
        Face.F: Color.ORANGE,
        Face.B: Color.WHITE
    }[self]

    @property
    def opposite(self) -> "Face": return {
        Face.L: Face.R,
        Face.R: Face.L,
        Face.U: Face.D,
        Face.D: Face.U,
        Face.F: Face.B,
        Face.B: Face.F
    }[self]

    @staticmethod
    def from_direction(d: Vector) -> "Face": return next(f for f in Face if f.direction == d)

    @staticmethod
    def from_color(c: Color) -> "Face": return next(f for f in Face if f.color == c)

    def is_on_face(self, x: int, y: int, z: int) -> bool:
        dx, dy, dz = self.direction
        return (
            (dx == 0 or x == dx) and
            (dy == 0 or y == dy) and
            (dz == 0 or z == dz)
        )

def is_center(x: int, y: int, z: int) -> bool: return (x, y, z).count(0) == 2

class Cubie:
    #X, Y and Z are the cubie's own axes in cube coordinates, turned along with its position
    id: str
    home_posn: Vector
    posn: Vector

    X: Vector
    Y: Vector
    Z: Vector

    color: typing.Optional[Color]
    rotmat: typing.Optional["Turn"]

    def __init__(self, x: int, y: int, z: int):
        if not all(isinstance(c, int) and not isinstance(c, bool) and c in (-1, 0, 1) for c in (x, y, z)):
            raise InvalidCubieError(f"invalid cubie <{x},{y},{z}>")

        self.id = f"<{x},{y},{z}>"
        self.home_posn = self.posn = Vector(x, y, z)
        self.X, self.Y, self.Z = X, Y, Z

        self.color = self.rotmat = None
        if is_center(x, y, z):
            from .moves import Turn
            self.color = Face.from_direction(self.home_posn).color
            self.rotmat = Turn(self.color.value)

    def rotate(self, mat: typing.Sequence[typing.Sequence[int]]):
        self.X = self.X.matmult(mat)
        self.Y = self.Y.matmult(mat)
        self.Z = self.Z.matmult(mat)

        self.posn = self.posn.matmult(mat)

    def update(self, x: int, y: int, z: int,
                     x_axis_x: int, x_axis_y: int, x_axis_z: int,
                     y_axis_x: int, y_axis_y: int, y_axis_z: int):
        #No plausibility checks, this is how broken cubes get built too
        self.posn = Vector(x, y, z)

        self.X = Vector(x_axis_x, x_axis_y, x_axis_z)
        self.Y = Vector(y_axis_x, y_axis_y, y_axis_z)
        self.Z = cross_product(self.X, self.Y)

    def get_face_color(self, face: Face) -> Color:
        #Map the world direction back into the cubie's home frame
        d = face.direction
        home_dir = Vector(
            sum(a * b for a, b in zip(self.X, d)),
            sum(a * b for a, b in zip(self.Y, d)),
            sum(a * b for a, b in zip(self.Z, d))
        )
        return Face.from_direction(home_dir).color

    @property
    def is_home(self) -> bool: return self.posn == self.home_posn

    @property
    def is_solved(self) -> bool:
        #A center's twist shows no sticker, only its position counts
        if self.is_center or self.home_posn == (0, 0, 0): return self.is_home
        return self.is_home and (self.X, self.Y, self.Z) == (X, Y, Z)

    @property
    def is_center(self): return is_center(*self.home_posn)

    def __repr__(self): return f"Cubie({self.id} at {self.posn} X={self.X} Y={self.Y} Z={self.Z})"
