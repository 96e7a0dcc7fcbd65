"""Default structlog sink."""
import json
import logging

from sweetener.logger import LOGGER_NAME, configure_logger, get_logger


def _file_handlers():
    return [h for h in logging.getLogger(LOGGER_NAME).handlers if isinstance(h, logging.FileHandler)]


def test_reconfigure_replaces_file_handler(tmp_path):
    configure_logger(str(tmp_path / "a.log"))
    configure_logger(str(tmp_path / "b.log"))
    handlers = _file_handlers()
    assert len(handlers) == 1
    assert handlers[0].baseFilename.endswith("b.log")


def test_json_lines(tmp_path):
    path = tmp_path / "json.log"
    configure_logger(str(path), json_logs=True)
    get_logger().info("step started", step="a step")
    _file_handlers()[0].flush()

    entry = json.loads(path.read_text(encoding="utf-8").strip().splitlines()[-1])
    assert entry["event"] == "step started"
    assert entry["step"] == "a step"
    assert entry["level"] == "info"
    assert entry["logger"] == LOGGER_NAME


def test_level_filters(tmp_path):
    path = tmp_path / "warn.log"
    configure_logger(str(path), level="warning")
    get_logger().info("quiet")
    get_logger().warning("loud")
    _file_handlers()[0].flush()

    text = path.read_text(encoding="utf-8")
    assert "loud" in text
    assert "quiet" not in text
