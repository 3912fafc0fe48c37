from play2win.prompts import (
    NO_MATCHING_ROWS,
    build_prompt,
    build_synthesis_prompt,
    find_relevant_rows,
    format_relevant_rows,
)

ROWS = [
    {"Game ID": str(i), "Opponent": "Rivals FC" if i % 2 else "City", "Minute": str(i * 5)}
    for i in range(1, 10)
]


def test_find_relevant_rows_is_case_insensitive_substring():
    hits = find_relevant_rows(ROWS, "rivals")
    assert [r["Game ID"] for r in hits] == ["1", "3", "5", "7", "9"]


def test_empty_query_matches_everything():
    assert len(find_relevant_rows(ROWS, "")) == len(ROWS)


def test_format_relevant_rows_caps_at_five():
    text = format_relevant_rows(ROWS)
    assert text.count("\n- ") == 5
    assert "Game ID" not in text


def test_format_relevant_rows_with_game_id():
    text = format_relevant_rows(ROWS[:1], include_game_id=True)
    assert text.splitlines()[1].startswith("- Game ID: 1, Opponent: Rivals FC, Minute: 5")


def test_format_no_rows():
    assert format_relevant_rows([]) == NO_MATCHING_ROWS


def test_prompt_layout():
    assert build_prompt("SYS", "DATA", "q?") == "SYS\n\nDATA\n\nUser Query: q?"
    synth = build_synthesis_prompt("R", "M")
    assert "Researcher analysis (human):\nR" in synth
    assert "Model analysis (AI):\nM" in synth
    assert synth.endswith("Now produce the conclusion.")
