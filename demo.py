import asyncio, aioconsole, logging, cubesolve, argparse, random

def solve(cube: cubesolve.Cube):
    solution = ""
    for name, cmds in cube.solve_steps():
        print(f"{name:28s} {cmds or '-'}")
        solution += cmds

    solution = cubesolve.cleanup(solution)
    print(f"Solution ({len(solution)} commands): {solution}")
    print(f"Solved: {cube.is_solved}")

def trace_turn(cube: cubesolve.Cube, turn: cubesolve.Turn):
    print(f"  {turn} ({turn.name.lower()})")

async def command_loop(cube: cubesolve.Cube, rng: random.Random):
    #Main command loop
    tracing = False
    while True:
        line = (await aioconsole.ainput("> ")).strip()
        cmd, _, arg = line.partition(" ")
        cmd = cmd.lower()
        if cmd == "h" or cmd == "help":
            print("(h)elp:           Shows this help text")
            print("(q)uit:           Exits the demo")
            print("(p)rint:          Shows the stickers of every face")
            print("(r)otate <cmds>:  Turns the cube, e.g. 'r rgb'")
            print("(u)ndo <cmds>:    Executes the inverse of the given commands")
            print("(x) scramble [n]: Applies a random scramble of n turns (default 25)")
            print("(s)olve:          Solves the cube and shows the commands of each step")
            print("(t)race:          Toggles printing every face turn as it happens")
            print("(d)ebug:          Toggles debug logging")
            print("Commands: r/w/b/o/y/g turn the red/white/blue/orange/yellow/green face counter-clockwise,")
            print("          upper case turns clockwise, i/j/k turn the middle slices")
        elif cmd == "q" or cmd == "quit":
            print("Exiting...")
            break
        elif cmd == "p" or cmd == "print":
            print(f"{cube}")
            print(f"Solved: {cube.is_solved}")
        elif cmd == "r" or cmd == "rotate":
            cube.rotate(arg)
        elif cmd == "u" or cmd == "undo":
            cube.reverse(arg)
        elif cmd == "x" or cmd == "scramble":
            try:
                length = int(arg) if arg else 25
            except ValueError:
                print("Usage: (x) scramble [n]")
                continue

            scramble = cubesolve.random_scramble(length, rng)
            print(f"Scramble: {scramble}")
            cube.rotate(scramble)
        elif cmd == "s" or cmd == "solve":
            solve(cube)
        elif cmd == "t" or cmd == "trace":
            tracing = not tracing
            if tracing: cube.register_handler(trace_turn)
            else: cube.unregister_handler(trace_turn)
            print(f"{'Enabled' if tracing else 'Disabled'} turn tracing")
        elif cmd == "d" or cmd == "debug":
            if cubesolve.LOGGER.level != logging.DEBUG:
                cubesolve.LOGGER.setLevel(logging.DEBUG)
                print("Enabled debug logging")
            else:
                cubesolve.LOGGER.setLevel(logging.INFO)
                print("Disabled debug logging")
        elif cmd: print("Unknown command")

async def main(args: argparse.Namespace):
    cube = cubesolve.Cube()
    rng = random.Random(args.seed)

    #Apply the startup scramble
    if args.scramble: cube.rotate(args.scramble)
    if args.random > 0:
        scramble = cubesolve.random_scramble(args.random, rng)
        print(f"Scramble: {scramble}")
        cube.rotate(scramble)

    print(f"Cube: {cube}")
    await command_loop(cube, rng)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser()
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("-s", "--scramble", default="", help="Commands to scramble the cube with on startup")
    parser.add_argument("-n", "--random", type=int, default=0, help="Length of a random scramble to apply on startup")
    parser.add_argument("--seed", type=int, default=None, help="Seed for random scrambles")
    args = parser.parse_args()

    if args.debug: cubesolve.LOGGER.setLevel(logging.DEBUG)

    asyncio.run(main(args))
