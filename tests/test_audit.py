import json
from datetime import timezone

import pytest

from envchain.audit import AuditLogger, AuditMiddleware, read_all


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "audit.log"


def test_log_writes_entry(log_path):
    with AuditLogger(log_path) as logger:
        logger.log("export", "production", ["DB_URL", "API_KEY"], None)
    entries = read_all(log_path)
    assert len(entries) == 1
    assert entries[0].vars == ["DB_URL", "API_KEY"]


def test_read_all_parses_entries(log_path):
    logger = AuditLogger(log_path)
    logger.log("export", "staging", ["FOO"], {"format": "dotenv"})
    logger.log("validate", "dev", None, None)
    logger.close()

    entries = read_all(log_path)
    assert len(entries) == 2
    assert entries[0].action == "export"
    assert entries[0].context == "staging"
    assert entries[0].meta["format"] == "dotenv"
    assert entries[1].action == "validate"
    assert entries[0].timestamp.tzinfo is not None
    assert entries[0].timestamp.utcoffset() == timezone.utc.utcoffset(None)


def test_read_all_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_all(tmp_path / "nonexistent" / "audit.log")


def test_new_logger_invalid_path(tmp_path):
    with pytest.raises(OSError):
        AuditLogger(tmp_path / "nonexistent" / "dir" / "audit.log")


def test_log_empty_context(log_path):
    with AuditLogger(log_path) as logger:
        logger.log("diff", "", None, None)
    entries = read_all(log_path)
    assert len(entries) == 1
    assert entries[0].context == ""


def test_empty_vars_and_meta_omitted(log_path):
    with AuditLogger(log_path) as logger:
        logger.log("validate", "dev", [], {})
    line = json.loads(log_path.read_text().strip())
    assert set(line) == {"timestamp", "action", "context"}


def test_read_all_parses_nanosecond_timestamps(log_path):
    log_path.write_text(
        '{"timestamp":"2024-03-01T10:20:30.123456789Z","action":"export","context":"x"}\n\n'
    )
    entries = read_all(log_path)
    assert entries[0].timestamp.microsecond == 123456
    assert entries[0].timestamp.year == 2024


def test_read_all_bad_line(log_path):
    log_path.write_text("not json\n")
    with pytest.raises(ValueError):
        read_all(log_path)


def test_logger_appends(log_path):
    with AuditLogger(log_path) as logger:
        logger.log("export", "a")
    with AuditLogger(log_path) as logger:
        logger.log("export", "b")
    assert [e.context for e in read_all(log_path)] == ["a", "b"]


def test_middleware_records_actions(log_path):
    with AuditMiddleware(log_path) as mw:
        mw.log_export("prod", "json", ["A"])
        mw.log_validate("dev", ["B"])
        mw.log_diff("dev", "prod")
    entries = read_all(log_path)
    assert [e.action for e in entries] == ["export", "validate", "diff"]
    assert entries[0].meta == {"format": "json"}
    assert entries[2].meta == {"compare_to": "prod"}
    assert entries[2].context == "dev"


def test_middleware_disabled_writes_nothing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    mw = AuditMiddleware("")
    mw.log_export("prod", "json", ["A"])
    mw.log_diff("a", "b")
    mw.close()
    assert mw.enabled is False
    assert list(tmp_path.iterdir()) == []