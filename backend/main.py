import argparse
import json
import logging
import random
import time
from typing import Dict, Optional

from dotenv import load_dotenv

from data_access import HighScoreStore
from domain.constants import DEFAULT_DIFFICULTY, DIFFICULTY_CONFIG, GameStatus
from domain.engine import SimulationEngine
from llm_providers import commentary_config_from_env, create_llm_provider
from players import RandomPlayer
from services.commentary_feed import CommentaryFeed
from services.commentary_service import CommentaryService
from session import SessionController

load_dotenv()

logger = logging.getLogger(__name__)


def build_commentary_feed() -> CommentaryFeed:
    """Commentary feed backed by the provider configured in the environment."""
    provider = create_llm_provider(commentary_config_from_env())
    if provider is None:
        logger.info("OPENROUTER_API_KEY not set; commentary runs offline")
    return CommentaryFeed(CommentaryService(provider))


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(
    difficulty: str = DEFAULT_DIFFICULTY,
    max_ticks: int = 1000,
    seed: Optional[int] = None,
    realtime: bool = False,
    show_every: int = 0,
    feed: Optional[CommentaryFeed] = None,
    store=None,
) -> Dict:
    """
    Runs a single headless session driven by the random autopilot.

    Args:
        difficulty: difficulty name (EASY / MEDIUM / HARD)
        max_ticks: stop after this many steps even if the snake is alive
        seed: seeds both food placement and the autopilot
        realtime: let the session's own ticker pace the game instead of
                  stepping as fast as possible
        show_every: print the board every N ticks (0 disables)
        feed: commentary feed receiving lifecycle events, optional
        store: high score store, optional

    Returns:
        A dictionary summarizing the session (score, high_score, status, ticks, difficulty).
    """
    rng = random.Random(seed)
    player = RandomPlayer(random.Random(rng.random()))

    controller = SessionController(
        difficulty=difficulty,
        store=store,
        on_event=feed.handle_event if feed is not None else None,
        engine=SimulationEngine(difficulty=difficulty, rng=rng),
        use_ticker=realtime,
    )

    def print_frame(state) -> None:
        if show_every and controller.engine.ticks % show_every == 0:
            print(f"\nTick {controller.engine.ticks} | score {state.score} | speed {state.speed}ms")
            print(state.print_board())

    def steer(state) -> None:
        print_frame(state)
        if state.status == GameStatus.PLAYING:
            controller.submit_direction(player.get_move(state))

    if realtime:
        controller.on_change = steer

    controller.start()

    if realtime:
        while controller.status == GameStatus.PLAYING and controller.engine.ticks < max_ticks:
            time.sleep(0.01)
    else:
        steer(controller.snapshot())
        while controller.status == GameStatus.PLAYING and controller.engine.ticks < max_ticks:
            controller.tick()
            steer(controller.snapshot())

    controller.close()
    final_state = controller.snapshot()

    return {
        "score": final_state.score,
        "high_score": final_state.high_score,
        "status": final_state.status,
        "ticks": controller.engine.ticks,
        "difficulty": difficulty,
    }


# -------------------------------
# Main Entry Point
# -------------------------------
def main():
    parser = argparse.ArgumentParser(
        description="Run a headless NeonSnake session driven by the random autopilot."
    )
    parser.add_argument("--difficulty", type=str.upper, choices=sorted(DIFFICULTY_CONFIG),
                        default=DEFAULT_DIFFICULTY, help="Difficulty preset")
    parser.add_argument("--max-ticks", type=int, default=1000,
                        help="Maximum number of ticks before stopping")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for food placement and autopilot")
    parser.add_argument("--realtime", action="store_true",
                        help="Pace ticks with the game timer instead of running flat out")
    parser.add_argument("--show-every", type=int, default=0,
                        help="Print the board every N ticks (0 = never)")
    parser.add_argument("--no-commentary", action="store_true",
                        help="Do not request AI commentary")
    parser.add_argument("--no-persist", action="store_true",
                        help="Keep the high score in memory only")
    parser.add_argument("--log-level", type=str, default="INFO")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s [%(levelname)s] %(message)s")

    feed = None if args.no_commentary else build_commentary_feed()
    store = None if args.no_persist else HighScoreStore()

    result = run_simulation(
        difficulty=args.difficulty,
        max_ticks=args.max_ticks,
        seed=args.seed,
        realtime=args.realtime,
        show_every=args.show_every,
        feed=feed,
        store=store,
    )

    if feed is not None:
        feed.shutdown(wait=True)
        print("\nCommentary:")
        for message in feed.messages:
            print(f"  [{message.sender}] {message.text}")

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
