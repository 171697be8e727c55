import json
from pathlib import Path

import events_cli
from events_main.utils.config import CONFIG


def _slot_file() -> Path:
    return Path(CONFIG["storage"]["data_dir"]) / "events.json"


def test_add_and_list(capsys):
    assert events_cli.main(["add", "Launch", "2024-05-01", "--no-delay", "--yes"]) == 0
    assert events_cli.main(["add", "Kickoff", "2024-03-10", "--no-delay", "--yes"]) == 0
    out = capsys.readouterr().out
    assert "Event added successfully! Launch scheduled for May 1st, 2024" in out

    assert events_cli.main(["list"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Events (2)"
    assert "Kickoff" in lines[1]
    assert "Launch" in lines[2]


def test_list_empty(capsys):
    assert events_cli.main(["list"]) == 0
    out = capsys.readouterr().out
    assert "Events (0)" in out
    assert "No events yet" in out
    assert not _slot_file().exists()


def test_add_rejects_bad_input(capsys):
    assert events_cli.main(["add", "   ", "2024-05-01"]) == 1
    err = capsys.readouterr().err
    assert "name: Event name cannot be empty." in err
    assert not _slot_file().exists()


def test_delete_with_yes_clears_slot(capsys):
    events_cli.main(["add", "Launch", "2024-05-01", "--no-delay", "--yes"])
    event_id = json.loads(_slot_file().read_text(encoding="utf-8"))[0]["id"]
    assert events_cli.main(["delete", event_id, "--yes"]) == 0
    assert "Launch has been removed" in capsys.readouterr().out
    assert not _slot_file().exists()


def test_delete_can_be_declined(monkeypatch, capsys):
    events_cli.main(["add", "Launch", "2024-05-01", "--no-delay", "--yes"])
    event_id = json.loads(_slot_file().read_text(encoding="utf-8"))[0]["id"]
    monkeypatch.setattr("builtins.input", lambda prompt: "n")
    assert events_cli.main(["delete", event_id]) == 0
    assert "Cancelled." in capsys.readouterr().out
    assert len(json.loads(_slot_file().read_text(encoding="utf-8"))) == 1


def test_delete_unknown_id(capsys):
    assert events_cli.main(["delete", "nope", "--yes"]) == 0
    assert "No event with id nope" in capsys.readouterr().out


def test_corrupt_file_warns_and_is_kept(capsys):
    path = _slot_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("oops", encoding="utf-8")
    assert events_cli.main(["list"]) == 0
    out = capsys.readouterr().out
    assert "[warning] Failed to load saved events" in out
    assert "Events (0)" in out
    assert path.read_text(encoding="utf-8") == "oops"


def test_add_asks_before_creating(monkeypatch, capsys):
    prompts = []

    def answer(prompt):
        prompts.append(prompt)
        return "y"

    monkeypatch.setattr("builtins.input", answer)
    assert events_cli.main(["add", "Launch", "2024-05-01", "--no-delay"]) == 0
    assert prompts == ["Are you sure you want to create this event? [y/N] "]
    assert "Event added successfully!" in capsys.readouterr().out
    assert len(json.loads(_slot_file().read_text(encoding="utf-8"))) == 1


def test_add_can_be_declined(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "")
    assert events_cli.main(["add", "Launch", "2024-05-01", "--no-delay"]) == 0
    assert "Cancelled." in capsys.readouterr().out
    assert not _slot_file().exists()


def test_invalid_add_is_not_confirmed(monkeypatch):
    def no_prompt(prompt):
        raise AssertionError("prompted for invalid input")

    monkeypatch.setattr("builtins.input", no_prompt)
    assert events_cli.main(["add", "x", "2024-05-01"]) == 1
