import io
import json

from tafl.core import GameLogger, Piece, PieceKind, Player, Position, ReportFileLogger, Side

SEPARATOR = "*" * 75


def make_pieces():
    a1 = Piece(PieceKind.PAWN, Side.ATTACKER, "A1", moves=[Position(3, 0), Position(3, 2)])
    a2 = Piece(
        PieceKind.PAWN,
        Side.ATTACKER,
        "A2",
        moves=[Position(0, 3), Position(1, 3), Position(1, 5)],
        captures=2,
    )
    d1 = Piece(PieceKind.PAWN, Side.DEFENDER, "D1", moves=[Position(5, 3), Position(2, 3)], captures=1)
    king = Piece(PieceKind.KING, Side.DEFENDER, "K2", moves=[Position(5, 5)])
    positions = {
        Position(3, 2): [a1, d1],
        Position(1, 3): [a2, a2],
        Position(5, 5): [king, a1, d1],
        Position(0, 3): [a2],
    }
    return [king, d1, a2, a1], positions


def test_report_sections_and_ordering() -> None:
    pieces, positions = make_pieces()
    stream = io.StringIO()

    GameLogger(stream).log_game(Player(Side.ATTACKER, wins=1), positions, pieces)

    assert stream.getvalue().splitlines() == [
        "A1: [(3, 0), (3, 2)]",
        "A2: [(0, 3), (1, 3), (1, 5)]",
        "D1: [(5, 3), (2, 3)]",
        SEPARATOR,
        "A2: 2 kills",
        "D1: 1 kills",
        SEPARATOR,
        "D1: 3 squares",
        "A2: 3 squares",
        "A1: 2 squares",
        SEPARATOR,
        "(5, 5)3 pieces",
        "(3, 2)2 pieces",
        SEPARATOR,
    ]


def test_winner_pieces_listed_first() -> None:
    pieces, positions = make_pieces()

    summary = GameLogger(io.StringIO()).summary(Player(Side.DEFENDER), positions, pieces)

    assert [entry["name"] for entry in summary["moves"]] == ["D1", "A1", "A2"]
    assert summary["winner"] == "DEFENDER"


def test_report_file_logger_appends(tmp_path) -> None:
    pieces, positions = make_pieces()
    text_path = tmp_path / "report.txt"
    json_path = tmp_path / "report.jsonl"

    for _ in range(2):
        ReportFileLogger(text_path).log_game(Player(Side.ATTACKER), positions, pieces)
        ReportFileLogger(json_path, "json").log_game(Player(Side.ATTACKER), positions, pieces)

    assert text_path.read_text().count(SEPARATOR) == 8
    records = [json.loads(line) for line in json_path.read_text().splitlines()]
    assert len(records) == 2
    assert records[0]["positions"][0] == {"position": [5, 5], "pieces": 3}
