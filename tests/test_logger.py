import json

from logger import build_logger, close_logger


def test_json_lines_file(tmp_path):
    path = tmp_path / "app.log"
    log = build_logger(path, name="zerossl.logtest", console=False)

    log.info("Certificate %s requested", "abc123", extra={"event": "certificate_created"})
    close_logger(log)

    line = json.loads(path.read_text(encoding="utf-8").strip())
    assert line["msg"] == "Certificate abc123 requested"
    assert line["level"] == "INFO"
    assert line["event"] == "certificate_created"
    assert not log.handlers
