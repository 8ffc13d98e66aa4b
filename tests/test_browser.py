import pytest

from filecrypt.browser import PARENT, SELECT, FileSelector, filter_choices, terminal_choose
from filecrypt.errors import IOFailure


def scripted(*answers):
    queue = list(answers)
    seen = []

    def choose(message, choices):
        seen.append((message, list(choices)))
        return queue.pop(0)

    choose.seen = seen
    return choose


def test_descend_and_pick_file(tmp_path):
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "a.txt").write_text("a")
    (tmp_path / "b.txt").write_text("b")

    choose = scripted("docs", "a.txt")
    assert FileSelector(tmp_path, choose).run() == tmp_path.resolve() / "docs" / "a.txt"
    assert choose.seen[0][1] == [SELECT, PARENT, "b.txt", "docs"]


def test_ascend_and_select_directory(tmp_path):
    (tmp_path / "inner").mkdir()
    choose = scripted(PARENT, SELECT)
    assert FileSelector(tmp_path / "inner", choose).run() == tmp_path.resolve()


def test_unreadable_directory(tmp_path):
    with pytest.raises(IOFailure):
        FileSelector(tmp_path / "missing", scripted(SELECT)).run()


def test_filter_choices_is_case_insensitive():
    assert filter_choices("TXT", ["a.txt", "b.bin", "C.Txt"]) == ["a.txt", "C.Txt"]


def test_terminal_choose_ignores_non_ascii_digits(monkeypatch, capsys):
    answers = iter(["²", "1"])
    monkeypatch.setattr("builtins.input", lambda _prompt: next(answers))
    assert terminal_choose("Pick", ["first", "second"]) == "second"
    assert "No unique match" in capsys.readouterr().out


def test_terminal_choose_accepts_unique_substring(monkeypatch):
    monkeypatch.setattr("builtins.input", lambda _prompt: "SEC")
    assert terminal_choose("Pick", ["first", "second"]) == "second"
