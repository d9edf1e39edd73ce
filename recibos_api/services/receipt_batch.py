from __future__ import annotations

import logging
import os
import shutil
import zipfile
from dataclasses import dataclass, field
from typing import List

from recibos_api.common.errors import InvalidInput, NoEmployees, RenderFailure
from .company import CompanyInfo
from .period import Period, interpret_period
from .receipt_common import sanitize_filename

log = logging.getLogger(__name__)

RECEIPT_PREFIX = "RECEIPT"
ARCHIVE_PREFIX = "RECEIPTS"


@dataclass
class BatchResult:
    archive: str
    files: List[str] = field(default_factory=list)
    period: Period | None = None

    @property
    def count(self) -> int:
        return len(self.files)


def receipt_filename(employee, period: Period, extension: str = ".pdf") -> str:
    return f"{RECEIPT_PREFIX}-{sanitize_filename(employee.nome_completo)}-{period.token}{extension}"


def archive_filename(period: Period) -> str:
    return f"{ARCHIVE_PREFIX}-{period.token}.zip"


def reset_scratch_dir(path: str) -> None:
    """Remove whatever a previous batch left and start from an empty directory."""
    try:
        if os.path.isdir(path):
            shutil.rmtree(path)
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise RenderFailure(f"could not clear the output directory {path}: {e}") from e


class ReceiptBatchGenerator:
    """
    Renders one receipt per employee for a pay period and zips them.

    The scratch directory belongs to this class: it is wiped at the start of
    every call. A failed render stops the loop; whatever was written so far
    stays on disk until the next call.
    """

    def __init__(self, store, renderer, company: CompanyInfo, scratch_dir: str):
        self.store = store
        self.renderer = renderer
        self.company = company
        self.scratch_dir = scratch_dir

    def generate(self, periodo) -> BatchResult:
        if not isinstance(periodo, str) or not periodo.strip():
            raise InvalidInput("O período de referência é obrigatório.")

        reset_scratch_dir(self.scratch_dir)

        employees = self.store.list()
        if not employees:
            raise NoEmployees("Nenhum funcionário encontrado.")

        period = interpret_period(periodo)
        log.info("generating %d receipts for period %r (token %s)", len(employees), period.display, period.token)

        extension = getattr(self.renderer, "extension", ".pdf")
        files: List[str] = []
        with self.renderer.session() as session:
            for emp in employees:
                pdf = session.render(emp, period, self.company)
                name = receipt_filename(emp, period, extension)
                if name in files:
                    # homonyms would overwrite each other
                    name = f"{name[:-len(extension)]}-{emp.id}{extension}"
                self._write(name, pdf)
                files.append(name)
                log.debug("receipt written: %s", name)

        archive = archive_filename(period)
        self._pack(archive, files)
        log.info("receipt batch done: %s (%d files)", archive, len(files))
        return BatchResult(archive=archive, files=files, period=period)

    def _write(self, name: str, content: bytes):
        try:
            with open(os.path.join(self.scratch_dir, name), "wb") as fh:
                fh.write(content)
        except OSError as e:
            raise RenderFailure(f"could not write {name}: {e}") from e

    def _pack(self, archive: str, files: List[str]):
        try:
            with zipfile.ZipFile(os.path.join(self.scratch_dir, archive), "w", zipfile.ZIP_DEFLATED) as zf:
                for name in files:
                    zf.write(os.path.join(self.scratch_dir, name), name)
        except OSError as e:
            raise RenderFailure(f"could not build archive {archive}: {e}") from e
