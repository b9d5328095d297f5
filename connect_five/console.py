import argparse
import asyncio

from connect_five.core.errors import ConnectFiveError
from connect_five.core.settings import configure_logging, get_settings
from connect_five.models.enums import AIDifficulty, AIPersonality, GameStatus
from connect_five.services.game_runner import GameRunner
from connect_five.services.game_service import GameService


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play Connect Five against the computer.")
    parser.add_argument("--name", default="Human", help="Your player name")
    parser.add_argument("--difficulty", choices=[d.value for d in AIDifficulty], default=AIDifficulty.MEDIUM.value)
    parser.add_argument("--personality", choices=[p.value for p in AIPersonality], default=None,
                        help="Evaluator personality (hard only)")
    parser.add_argument("--timeout", type=float, default=None, help="Seconds the AI may think per move")
    parser.add_argument("--hints", action="store_true", help="Show win probabilities before each move")
    return parser.parse_args(argv)


async def play(args):
    service = GameService()
    runner = GameRunner(service)

    difficulty = AIDifficulty(args.difficulty)
    state = service.start_new_game(
        args.name, "Computer",
        is_ai_opponent=True,
        difficulty=difficulty,
        personality=AIPersonality(args.personality) if args.personality else None,
    )

    print("=======================================")
    print(f"   CONNECT FIVE: {args.name} vs AI ({difficulty})")
    print("=======================================")
    print(state.board.get_visual_board())

    while not state.is_terminal:

        # --- Human Turn (Player 1) ---
        if not state.current_player.is_ai:
            valid_moves = state.board.get_valid_moves()
            if args.hints:
                chance = service.estimate_current_win_probability(state)
                print(f"\nYour chances: {chance:.0f}%")
                for p in service.estimate_win_probabilities(state, simulations=100):
                    print(f"  column {p.column}: {p.probability:.0f}%")
            try:
                user_input = input(f"\nYour Move (Columns {valid_moves}): ")
                state = service.make_move(state, int(user_input))
            except ValueError:
                print("Please enter a valid number.")
                continue
            except ConnectFiveError as e:
                print(f"{e}. Try again.")
                continue

        # --- AI Turn (Player 2) ---
        else:
            print("\nAI is thinking...")
            try:
                state = await runner.play_ai_turn(state, args.timeout)
            except ConnectFiveError as e:
                print(f"AI Error: {e}")
                break
            print(f"AI plays Column: {service.move_history[-1].column}")

        # Show Board
        print("\n" + state.board.get_visual_board())

    # --- End Game ---
    if state.status == GameStatus.DRAW:
        print("\nGame Over! It's a Draw.")
    elif state.winner is not None:
        print(f"\nGame Over! Winner: {state.winner.name}")


def main(argv=None):
    args = parse_args(argv)
    configure_logging(get_settings().log_level)
    try:
        asyncio.run(play(args))
    except (KeyboardInterrupt, EOFError):
        print("\nBye.")


if __name__ == "__main__":
    main()
