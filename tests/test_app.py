import logging

import pytest

from taskboard import main
from taskboard.logging_setup import setup_logging


@pytest.fixture
def frontend(tmp_path, monkeypatch):
    build = tmp_path / "dist"
    (build / "assets").mkdir(parents=True)
    (build / "index.html").write_text("<html>app</html>", encoding="utf-8")
    (build / "assets" / "app.js").write_text("console.log('hi')", encoding="utf-8")
    (tmp_path / "secret.txt").write_text("secret", encoding="utf-8")
    monkeypatch.setattr(main, "FRONTEND_DIR", str(build))
    return build


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_serves_static_file(client, frontend):
    response = client.get("/assets/app.js")

    assert response.status_code == 200
    assert response.text == "console.log('hi')"


@pytest.mark.parametrize("path", ["/", "/dashboard", "/login/extra"])
def test_unknown_paths_fall_back_to_index(client, frontend, path):
    response = client.get(path)

    assert response.status_code == 200
    assert response.text == "<html>app</html>"


def test_does_not_escape_build_dir(client, frontend):
    response = client.get("/..%2Fsecret.txt")

    assert "secret" not in response.text


def test_missing_build(client, tmp_path, monkeypatch):
    monkeypatch.setattr(main, "FRONTEND_DIR", str(tmp_path / "nowhere"))

    response = client.get("/dashboard")

    assert response.status_code == 404
    assert response.json() == {"message": "Frontend build not found."}


def test_setup_logging_writes_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    log_file = tmp_path / "logs" / "taskboard.log"
    try:
        setup_logging("debug", log_file)
        logging.getLogger("taskboard.test").info("hello from test")
        for handler in root.handlers:
            handler.flush()
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
        logging.captureWarnings(False)

    assert "INFO taskboard.test: hello from test" in log_file.read_text(encoding="utf-8")
