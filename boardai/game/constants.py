from __future__ import annotations

from config import CHESS_DEPTHS, OTHELLO_DEPTHS

# Difficulty labels per search depth
CHESS_DIFFICULTIES = dict(zip(CHESS_DEPTHS, ("Easy", "Medium", "Hard", "Expert")))
OTHELLO_DIFFICULTIES = dict(zip(OTHELLO_DEPTHS, ("Easy", "Medium", "Hard", "Expert")))

DIFFICULTIES = {
    "chess": CHESS_DIFFICULTIES,
    "othello": OTHELLO_DIFFICULTIES,
}

# Status texts
STATUS_YOUR_TURN = "Your turn"
STATUS_THINKING = "AI is thinking..."
STATUS_YOU_IN_CHECK = "Check! Your turn"
STATUS_AI_IN_CHECK = "AI is in check"
STATUS_YOU_WIN_MATE = "You win! Checkmate"
STATUS_AI_WINS_MATE = "The AI wins! Checkmate"
STATUS_STALEMATE = "Stalemate. It's a draw"
STATUS_NO_MOVE = "The AI found no move. Game over"
STATUS_AI_FAILED = "The AI search failed. Start a new game"
STATUS_YOU_WIN = "You win!"
STATUS_AI_WINS = "The AI wins!"
STATUS_DRAW = "It's a draw!"
STATUS_AI_PASSES = "The AI has no valid move. Keep playing"
STATUS_YOU_PASS = "You have no valid move. The AI plays again"

# Unicode symbols per (color, kind); White is 1, Black is -1
CHESS_SYMBOLS = {
    1: {"king": "♔", "queen": "♕", "rook": "♖", "bishop": "♗", "knight": "♘", "pawn": "♙"},
    -1: {"king": "♚", "queen": "♛", "rook": "♜", "bishop": "♝", "knight": "♞", "pawn": "♟"},
}
CHESS_LETTERS = {"king": "k", "queen": "q", "rook": "r", "bishop": "b", "knight": "n", "pawn": "p"}

OTHELLO_SYMBOLS = {0: "·", 1: "●", -1: "○"}
OTHELLO_LETTERS = {0: ".", 1: "B", -1: "W"}

HINT_SYMBOL = "*"
