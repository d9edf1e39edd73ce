# recibos_api/common/listing.py
from flask import request


def q_text():
    q = (request.args.get("q") or "").strip()
    return q or None


def sort_params(allowed: dict[str, object]):
    """
    allowed: {"nome_completo": Model.nome_completo, ...}
    ?sort=nome_completo,-salario_base  => returns list of (column, asc:bool)
    Unknown keys ignored.
    """
    raw = request.args.get("sort", "")
    items = []
    for part in [p.strip() for p in raw.split(",") if p.strip()]:
        asc = True
        key = part
        if part.startswith("-"):
            asc = False
            key = part[1:]
        col = allowed.get(key)
        if col is not None:
            items.append((col, asc))
    return items
