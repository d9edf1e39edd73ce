from flask import Blueprint

from recibos_api.common.http import ok

bp = Blueprint("health", __name__)


@bp.get("/health")
def health():
    return ok({"status": "ok"})
