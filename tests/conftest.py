from contextlib import contextmanager

import pytest

from recibos_api import create_app
from recibos_api.common.errors import RenderFailure
from recibos_api.extensions import db


class FakeRenderer:
    """Stands in for the WeasyPrint renderer; records what it was asked to do."""
    extension = ".pdf"

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.opened = 0
        self.closed = 0
        self.rendered = []

    @contextmanager
    def session(self):
        self.opened += 1
        try:
            yield self
        finally:
            self.closed += 1

    def render(self, employee, period, company):
        if employee.nome_completo == self.fail_on:
            raise RenderFailure(f"engine crashed on {employee.nome_completo}")
        self.rendered.append((employee.nome_completo, period.token, company.name))
        return b"%PDF-1.4 fake receipt for " + employee.nome_completo.encode("utf-8")


@pytest.fixture(scope="function")
def scratch_dir(tmp_path):
    return tmp_path / "temp_files"


@pytest.fixture(scope="function")
def app(monkeypatch, scratch_dir):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("RECEIPTS_SCRATCH_DIR", str(scratch_dir))
    app = create_app()
    app.config["TESTING"] = True
    app.extensions["receipt_renderer"] = FakeRenderer()
    with app.app_context():
        db.create_all()
        yield app


@pytest.fixture(scope="function")
def client(app):
    return app.test_client()


@pytest.fixture(scope="function")
def session(app):
    with app.app_context():
        yield db.session
