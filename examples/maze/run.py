"""
Maze Walk Demo

A scripted player wanders a generated maze by sending random direction
messages, the same way a chat host would forward user messages. If the exit
is not reached within the allowed tries the player quits and the way out is
drawn.

Features:
- Corridor movement (one command can carry the player several cells)
- Fog of war from the visited set
- Session snapshot saved to JSON after every turn and resumed from it

Run: python examples/maze/run.py --size 9 --tries 10 --seed 7
"""

import argparse
import asyncio
import random

from mazewalker import JsonPersistence, MazeSession
from mazewalker.config import Config

DIRECTIONS = ["up", "down", "right", "left"]
SESSION_ID = "demo"


async def main() -> None:
    parser = argparse.ArgumentParser(description="Scripted maze walk")
    parser.add_argument("--size", type=int, default=Config.MAZE_SIZE)
    parser.add_argument("--tries", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--state-dir", default=str(Config.STATE_DIR))
    args = parser.parse_args()

    rng = random.Random(args.seed)
    persistence = JsonPersistence(args.state_dir)
    await persistence.initialize()

    session = MazeSession.new(args.size, rng=rng)
    print(session.render())

    tries = args.tries
    while not session.won() and tries > 0:
        message = rng.choice(DIRECTIONS)
        outcome = session.before_prompt(message)
        await persistence.save_session(SESSION_ID, session.snapshot())

        # Resume from storage as a real host would on the next message
        state = await persistence.get_session(SESSION_ID)
        session = MazeSession.from_state(state, rng=rng)

        print(f"\n> {message}")
        print(session.render())
        print(session.directions_note())
        if outcome.system_note:
            print(outcome.system_note)
        tries -= 1

    if not session.won():
        outcome = session.before_prompt("quit")
        await persistence.save_session(SESSION_ID, session.snapshot())
        print("\n> quit")
        print(session.render())
        print(outcome.system_note)

    session.describe()
    await persistence.close()


if __name__ == "__main__":
    asyncio.run(main())
