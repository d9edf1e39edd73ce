from flask import Blueprint, current_app, request, send_from_directory

from recibos_api.common.http import ok
from recibos_api.services.employee_store import EmployeeStore
from recibos_api.services.receipt_batch import ReceiptBatchGenerator

bp = Blueprint("receipts", __name__)


def build_generator() -> ReceiptBatchGenerator:
    return ReceiptBatchGenerator(
        store=EmployeeStore(),
        renderer=current_app.extensions["receipt_renderer"],
        company=current_app.extensions["company"],
        scratch_dir=current_app.config["RECEIPTS_SCRATCH_DIR"],
    )


@bp.post("/gerar-recibos")
def generate_receipts():
    data = request.get_json(silent=True) or {}
    result = build_generator().generate(data.get("periodo"))
    return ok(
        {
            "file": result.archive,
            "files": result.files,
            "count": result.count,
            "periodo": result.period.token,
            "periodo_formatado": result.period.display,
        },
        message="Recibos gerados com sucesso.",
    )


@bp.get("/temp_files/<path:filename>")
def download(filename: str):
    return send_from_directory(current_app.config["RECEIPTS_SCRATCH_DIR"], filename, as_attachment=True)
