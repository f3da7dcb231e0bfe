from __future__ import annotations

import argparse

from config import setup_logging, get_config
from boardai.engine import GAMES
from boardai.game import TurnController, TextRenderer, group_moves_by_source

HELP = "Commands: <row> <col> | moves | new | depth <n> | quit"


def parse_args() -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play chess or Othello against the computer")
    ap.add_argument("--game", choices=GAMES, default="chess", help="Game to play")
    ap.add_argument("--depth", type=int, default=None, help="Search depth (difficulty)")
    ap.add_argument("--no-delay", action="store_true", help="Skip the AI thinking delay")
    return ap.parse_args()


def describe_moves(controller: TurnController) -> str:
    moves = controller.state.legal_moves(controller.state.human_color)
    if controller.game == "othello":
        return " ".join(f"{r},{c}" for r, c in moves) or "(no legal moves)"
    lines = []
    for (r, c), group in group_moves_by_source(moves).items():
        targets = " ".join(f"{m.target[0]},{m.target[1]}" for m in group)
        lines.append(f"{r},{c} -> {targets}")
    return "\n".join(lines) or "(no legal moves)"


def main() -> None:
    setup_logging()
    args = parse_args()
    config = get_config()

    controller = TurnController(
        args.game,
        depth=args.depth,
        think_delay=0.0 if args.no_delay else None,
        settings=config.engine,
    )
    renderer = TextRenderer(config.ui)
    print(HELP)
    try:
        while True:
            controller.wait()
            print(renderer.render(controller.snapshot()))
            try:
                line = input("> ").strip().lower()
            except EOFError:
                break
            if not line:
                continue
            parts = line.split()
            if parts[0] in ("quit", "exit", "q"):
                break
            if parts[0] == "new":
                controller.reset()
            elif parts[0] == "moves":
                print(describe_moves(controller))
            elif parts[0] == "depth" and len(parts) == 2 and parts[1].isdigit():
                if not controller.set_difficulty(int(parts[1])):
                    print("Unsupported depth")
            elif len(parts) == 2 and all(p.isdigit() for p in parts):
                controller.select_square((int(parts[0]), int(parts[1])))
            else:
                print(HELP)
    finally:
        controller.shutdown()


if __name__ == "__main__":
    main()
