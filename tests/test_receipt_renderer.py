from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from recibos_api.common.errors import RenderFailure
from recibos_api.services import money
from recibos_api.services.company import CompanyInfo
from recibos_api.services.period import interpret_period
from recibos_api.services import receipt_renderer
from recibos_api.services.receipt_renderer import ReceiptRenderer

COMPANY = CompanyInfo(name="Aliança Consig", cnpj="50.113.116/0001-05", city="Brasília")


def _emp(name="Márcia Gonçalves", cpf="333.444.555-66", salary=Decimal("4870.35")):
    return SimpleNamespace(id=1, nome_completo=name, cpf=cpf, salario_base=salary)


def test_template_gets_every_value():
    html = ReceiptRenderer().build_html(_emp(), interpret_period("setembro/2025"), COMPANY,
                                        issued_on=date(2025, 10, 1))
    assert "Márcia Gonçalves" in html
    assert "333.444.555-66" in html
    assert "R$ 4.870,35" in html
    assert "09/2025 (01/09 a 30/09)" in html
    assert "01 de outubro de 2025" in html
    assert "Aliança Consig" in html
    assert "50.113.116/0001-05" in html
    assert "Brasília" in html
    assert "REAIS" in html
    assert "{{" not in html


def test_unresolved_period_is_printed_as_typed():
    html = ReceiptRenderer().build_html(_emp(), interpret_period("13º salário"), COMPANY)
    assert "13º salário" in html


def test_words_failure_does_not_abort(monkeypatch):
    monkeypatch.setattr(money, "num2words", lambda *a, **kw: 1 / 0)
    html = ReceiptRenderer().build_html(_emp(), interpret_period("09/2025"), COMPANY)
    assert "R$ 4.870,35" in html
    assert "()" in html


def test_missing_template_is_render_failure(tmp_path):
    renderer = ReceiptRenderer(template_name="nope.html", template_dir=str(tmp_path))
    with pytest.raises(RenderFailure):
        renderer.build_html(_emp(), interpret_period("09/2025"), COMPANY)


def test_unknown_placeholder_is_render_failure(tmp_path):
    (tmp_path / "recibo.html").write_text("<p>{{ NOME }} {{ BANCO }}</p>", encoding="utf-8")
    renderer = ReceiptRenderer(template_dir=str(tmp_path))
    with pytest.raises(RenderFailure):
        renderer.build_html(_emp(), interpret_period("09/2025"), COMPANY)


def test_weasyprint_session_produces_pdf():
    try:
        import weasyprint  # noqa: F401
    except (ImportError, OSError) as e:
        pytest.skip(f"weasyprint unavailable: {e}")

    renderer = ReceiptRenderer()
    with renderer.session() as sess:
        first = sess.render(_emp(), interpret_period("09/2025"), COMPANY)
        second = sess.render(_emp(name="João da Silva"), interpret_period("09/2025"), COMPANY)
    assert first.startswith(b"%PDF")
    assert second.startswith(b"%PDF")


class _StubDocument:
    def __init__(self, markup, fail):
        self.markup = markup
        self.fail = fail
        self.pages = ["page-1"]

    def write_pdf(self):
        if self.fail:
            raise ValueError("invalid markup")
        return b"%PDF-1.7 " + self.markup.encode("utf-8")


class _StubEngine:
    """Records how the session drives HTML/FontConfiguration."""

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.font_configs = []
        self.documents = []
        self.render_calls = []

    def font_configuration(self):
        cfg = object()
        self.font_configs.append(cfg)
        return cfg

    def html(self, string, base_url):
        engine = self

        class _Html:
            def render(self, font_config):
                engine.render_calls.append((base_url, font_config))
                doc = _StubDocument(string, fail=engine.fail_on is not None and engine.fail_on in string)
                engine.documents.append(doc)
                return doc

        return _Html()


def test_session_shares_fonts_and_releases_pages(monkeypatch):
    engine = _StubEngine()
    monkeypatch.setattr(receipt_renderer, "load_engine", lambda: (engine.html, engine.font_configuration))

    renderer = ReceiptRenderer()
    with renderer.session() as sess:
        first = sess.render(_emp(), interpret_period("09/2025"), COMPANY)
        second = sess.render(_emp(name="João da Silva"), interpret_period("09/2025"), COMPANY)

    assert first.startswith(b"%PDF") and "Márcia Gonçalves".encode() in first
    assert b"Jo\xc3\xa3o da Silva" in second
    assert len(engine.font_configs) == 1
    assert [cfg for _, cfg in engine.render_calls] == engine.font_configs * 2
    assert all(url == renderer.base_url for url, _ in engine.render_calls)
    assert all(doc.pages == [] for doc in engine.documents)


def test_engine_error_is_render_failure_and_pages_released(monkeypatch):
    engine = _StubEngine(fail_on="Bruno Lima")
    monkeypatch.setattr(receipt_renderer, "load_engine", lambda: (engine.html, engine.font_configuration))

    with ReceiptRenderer().session() as sess:
        with pytest.raises(RenderFailure):
            sess.render(_emp(name="Bruno Lima"), interpret_period("09/2025"), COMPANY)
    assert engine.documents[0].pages == []


def test_engine_start_failure_is_render_failure(monkeypatch):
    def missing_libs():
        raise OSError("cannot load library 'libpango-1.0-0'")

    monkeypatch.setattr(receipt_renderer, "load_engine", missing_libs)
    with pytest.raises(RenderFailure):
        with ReceiptRenderer().session():
            pass
