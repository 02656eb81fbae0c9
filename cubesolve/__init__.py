from .log import LOGGER
from .vector import Vector, matmult, cross_product
from .state import Color, Face, Cubie, InvalidCubieError
from .moves import Turn, SLICES, expand, reverse, cleanup, random_scramble
from .cube import Cube
from .solver import solve_cube
