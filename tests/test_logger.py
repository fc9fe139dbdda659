import sqlite3

from intentpy.logging import IntentLogger


def test_logger_persists_to_sqlite(tmp_path):
    db_path = str(tmp_path / "logs.db")

    with IntentLogger(db_path=db_path, verbose=True) as logger:
        logger.log("INFO", "Intent resolved", {"action": "filter"})
        logger.log("DEBUG", "Intent prompt", "prompt text")

    conn = sqlite3.connect(db_path)
    rows = conn.execute("SELECT level, action, details FROM logs").fetchall()
    conn.close()

    assert rows == [("INFO", "Intent resolved", '{"action": "filter"}')]


def test_non_verbose_logger_skips_info(tmp_path):
    db_path = str(tmp_path / "logs.db")

    with IntentLogger(db_path=db_path) as logger:
        logger.log("INFO", "ignored")
        logger.log("WARNING", "kept")

    conn = sqlite3.connect(db_path)
    actions = [row[0] for row in conn.execute("SELECT action FROM logs")]
    conn.close()

    assert actions == ["kept"]


def test_console_only_logger_has_no_database():
    logger = IntentLogger()

    logger.log("ERROR", "console only", {"x": 1})

    assert logger.db_path is None
