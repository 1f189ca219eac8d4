import re

from gymlog.logger import log_event


def test_log_event_appends_lines(app, log_file):
    with app.app_context():
        log_event("first")
        log_event("second")

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert re.fullmatch(r"TIME: \d{4}-\d\d-\d\d \d\d:\d\d:\d\d MESSAGE:first", lines[0])
    assert lines[1].endswith("MESSAGE:second")


def test_log_event_without_app_context_uses_default(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    log_event("outside")
    assert "MESSAGE:outside" in (tmp_path / "logs.txt").read_text(encoding="utf-8")


def test_log_event_survives_unwritable_path(app, tmp_path, capsys):
    app.config["LOG_FILE"] = str(tmp_path)
    with app.app_context():
        log_event("lost")
    assert "MESSAGE:lost" in capsys.readouterr().err
