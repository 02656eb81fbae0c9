import typing

Matrix = typing.Sequence[typing.Sequence[int]]

class Vector(typing.NamedTuple):
    x: int
    y: int
    z: int

    def __add__(self, other: "Vector") -> "Vector": return Vector(self.x + other.x, self.y + other.y, self.z + other.z)
    def __sub__(self, other: "Vector") -> "Vector": return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
    def __neg__(self) -> "Vector": return Vector(-self.x, -self.y, -self.z)

    def matmult(self, mat: Matrix) -> "Vector": return matmult(mat, self)

    def __str__(self): return f"<{self.x},{self.y},{self.z}>"

X = Vector(1, 0, 0)
Y = Vector(0, 1, 0)
Z = Vector(0, 0, 1)

NEG_X = -X
NEG_Y = -Y
NEG_Z = -Z

def matmult(mat: Matrix, vec: Vector) -> Vector:
    #Row-major matrix times column vector
    return Vector(*(sum(mat[r][c] * vec[c] for c in range(3)) for r in range(3)))

def cross_product(u: Vector, v: Vector) -> Vector:
    return Vector(
        u[1]*v[2] - u[2]*v[1],
        u[2]*v[0] - u[0]*v[2],
        u[0]*v[1] - u[1]*v[0]
    )
