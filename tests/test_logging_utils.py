import json

from cavern import logging_utils


def test_info_emits_key_value_pairs(capsys):
    logging_utils.get_logger("cavern.test").info(event="level_generated", level_no=2, note="two words")
    out = capsys.readouterr().out.strip()
    assert out.startswith("level=info ts=")
    assert "event=level_generated" in out
    assert "level_no=2" in out
    assert "note=two_words" in out
    assert "logger=cavern.test" in out


def test_debug_suppressed_at_default_level(capsys):
    logging_utils.log.debug(event="hidden")
    assert capsys.readouterr().out == ""


def test_level_threshold_from_env(monkeypatch, capsys):
    monkeypatch.setenv("CAVERN_LOG_LEVEL", "debug")
    logging_utils.log.debug(event="shown")
    assert "event=shown" in capsys.readouterr().out
    monkeypatch.setenv("CAVERN_LOG_LEVEL", "error")
    logging_utils.log.warn(event="muted")
    assert capsys.readouterr().out == ""


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setenv("CAVERN_LOG_JSON", "1")
    logging_utils.log.info(event="startup", skipped=None)
    rec = json.loads(capsys.readouterr().out)
    assert rec["event"] == "startup"
    assert rec["level"] == "info"
    assert "skipped" not in rec


def test_errors_go_to_stderr(capsys):
    logging_utils.log.error(event="boom")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "event=boom" in captured.err


def test_get_logger_is_cached():
    assert logging_utils.get_logger("x") is logging_utils.get_logger("x")


def test_timed_emits_once_with_elapsed(capsys):
    with logging_utils.log.timed("level_generated", depth=1) as fields:
        assert capsys.readouterr().out == ""
        fields["enemies"] = 13
    out = capsys.readouterr().out.strip()
    assert "event=level_generated" in out
    assert "depth=1" in out and "enemies=13" in out
    assert "elapsed_ms=" in out
