import typing, enum, math, random, re
from . import state
from .vector import Vector

class Turn(enum.Enum):
    #Lower case letters turn counter-clockwise, upper case clockwise (seen from outside)
    UPPER_CCW = 'b'
    UPPER_CW = 'B'
    LOWER_CCW = 'r'
    LOWER_CW = 'R'
    LEFT_CCW = 'g'
    LEFT_CW = 'G'
    RIGHT_CCW = 'y'
    RIGHT_CW = 'Y'
    FRONT_CCW = 'o'
    FRONT_CW = 'O'
    BACK_CCW = 'w'
    BACK_CW = 'W'

    @property
    def face(self) -> state.Face: return state.Face.from_color(state.Color(self.value.lower()))
    @property
    def is_ccw(self) -> bool: return self.value.islower()
    @property
    def inverse(self) -> "Turn": return Turn(self.value.swapcase())

    @property
    def angle(self) -> float: return (+1 if self.is_ccw else -1) * math.pi / 2

    @property
    def rot_matrix(self) -> typing.List[typing.List[int]]:
        #Counter-clockwise is a right-handed quarter turn about the face's outward direction
        dx, dy, dz = self.face.direction
        s = +1 if (self.is_ccw ^ (dx < 0 or dy < 0 or dz < 0)) else -1
        if dx != 0:
            return [
                [ 1,  0,  0],
                [ 0,  0, -s],
                [ 0, +s,  0]
            ]
        elif dy != 0:
            return [
                [ 0,  0, +s],
                [ 0,  1,  0],
                [-s,  0,  0]
            ]
        elif dz != 0:
            return [
                [ 0, -s,  0],
                [+s,  0,  0],
                [ 0,  0,  1]
            ]
        else: assert False

    def is_on_face(self, posn: Vector) -> bool: return self.face.is_on_face(*posn)

    def __str__(self): return self.value

TURN_LETTERS = frozenset(t.value for t in Turn)

#Middle slice turns, each one is a pair of opposite face turns
SLICES = {
    'i': 'Br',
    'I': 'bR',
    'j': 'Ow',
    'J': 'oW',
    'k': 'Gy',
    'K': 'gY'
}

COMMAND_LETTERS = TURN_LETTERS | frozenset(SLICES)

def expand(cmds: str) -> typing.Iterator[Turn]:
    #Unknown characters are skipped
    for c in cmds:
        if c in TURN_LETTERS: yield Turn(c)
        elif c in SLICES: yield from expand(SLICES[c])

def other_color(c: str) -> str: return c.swapcase()

def reverse(cmds: str) -> str:
    return "".join(other_color(c) for c in reversed(cmds) if not c.isspace())

_CLEANUP_RULES: typing.List[typing.Tuple[str, str]] = (
    [(c + c.upper(), "") for c in "rwgboyijk"] +
    [(c.upper() + c, "") for c in "rwgboyijk"] +
    [(c * 3, c.upper()) for c in "rwgboyijk"] +
    [(c.upper() * 3, c) for c in "rwgboyijk"]
)

def cleanup(cmds: str) -> str:
    #Inverse pairs cancel and three equal quarter turns become one the other way, until nothing changes
    cmds = re.sub(r"\s+", "", cmds)

    change = True
    while change:
        change = False
        for pat, repl in _CLEANUP_RULES:
            c2 = cmds.replace(pat, repl)
            change |= len(c2) < len(cmds)
            cmds = c2

    return cmds

def random_scramble(length: int, rng: typing.Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    letters = sorted(TURN_LETTERS)

    cmds = ""
    while len(cmds) < length:
        c = rng.choice(letters)
        if cmds and c == other_color(cmds[-1]): continue
        cmds += c
    return cmds
