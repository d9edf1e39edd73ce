from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from datetime import date
from typing import Iterator

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from recibos_api.common.errors import RenderFailure
from .company import CompanyInfo
from .money import amount_in_words, format_brl, format_long_date
from .period import Period

log = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")
PDF_EXTENSION = ".pdf"


def load_engine():
    """(HTML, FontConfiguration) from WeasyPrint, imported on first use."""
    from weasyprint import HTML
    from weasyprint.text.fonts import FontConfiguration

    return HTML, FontConfiguration


class ReceiptSession:
    """
    One PDF engine session for a whole batch. The font configuration is
    built once here and shared by every document rendered through it.
    """

    def __init__(self, renderer: "ReceiptRenderer"):
        self._renderer = renderer
        self._html, font_configuration = load_engine()
        self._fonts = font_configuration()

    def render(self, employee, period: Period, company: CompanyInfo) -> bytes:
        markup = self._renderer.build_html(employee, period, company)
        document = None
        try:
            document = self._html(string=markup, base_url=self._renderer.base_url).render(font_config=self._fonts)
            return document.write_pdf()
        except Exception as e:
            raise RenderFailure(f"PDF engine failed for {employee.nome_completo!r}: {e}") from e
        finally:
            # laid-out pages hold every box of the document; free them per employee
            if document is not None:
                document.pages.clear()

    def close(self):
        self._fonts = None


class ReceiptRenderer:
    extension = PDF_EXTENSION

    def __init__(self, template_name: str = "recibo.html", template_dir: str | None = None,
                 base_url: str | None = None):
        self.template_name = template_name
        self.template_dir = template_dir or TEMPLATES_DIR
        self.base_url = base_url or self.template_dir
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            undefined=StrictUndefined,
            autoescape=select_autoescape(["html", "htm"]),
        )

    def placeholders(self, employee, period: Period, company: CompanyInfo,
                     issued_on: date | None = None) -> dict:
        salary = employee.salario_base if employee.salario_base is not None else 0
        return {
            "NOME": employee.nome_completo or "",
            "CPF": employee.cpf or "",
            "VALOR_FORMATADO": format_brl(salary),
            "VALOR_POR_EXTENSO": amount_in_words(salary, owner=employee.nome_completo),
            "PERIODO": period.display,
            "DATA_ATUAL": format_long_date(issued_on or date.today()),
            "EMPRESA_NOME": company.name,
            "EMPRESA_CNPJ": company.cnpj,
            "CIDADE": company.city,
        }

    def build_html(self, employee, period: Period, company: CompanyInfo,
                   issued_on: date | None = None) -> str:
        """Fill the receipt template. Missing template or placeholder -> RenderFailure."""
        try:
            template = self.env.get_template(self.template_name)
            return template.render(**self.placeholders(employee, period, company, issued_on))
        except TemplateError as e:
            raise RenderFailure(f"receipt template error ({self.template_name}): {e}") from e

    @contextmanager
    def session(self) -> Iterator[ReceiptSession]:
        try:
            sess = ReceiptSession(self)
        except Exception as e:
            raise RenderFailure(f"could not start PDF engine: {e}") from e
        log.debug("PDF engine session opened")
        try:
            yield sess
        finally:
            sess.close()
            log.debug("PDF engine session closed")
