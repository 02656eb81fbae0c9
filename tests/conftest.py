import random
import pytest

import cubesolve

SCRAMBLE_SEEDS = range(40)

def _scramble(seed: int, length: int = 25) -> cubesolve.Cube:
    cube = cubesolve.Cube()
    cube.rotate(cubesolve.random_scramble(length, random.Random(seed)))
    return cube

@pytest.fixture
def cube():
    return cubesolve.Cube()

@pytest.fixture
def scrambled_cube():
    return _scramble

@pytest.fixture(params=SCRAMBLE_SEEDS)
def scrambled(request):
    return _scramble(request.param)
