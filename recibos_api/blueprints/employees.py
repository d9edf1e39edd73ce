from __future__ import annotations

from decimal import Decimal

from flask import Blueprint, request

from recibos_api.common.errors import InvalidInput
from recibos_api.common.http import ok
from recibos_api.common.listing import q_text, sort_params
from recibos_api.models.employee import Employee
from recibos_api.services.employee_store import EmployeeStore
from recibos_api.services.money import to_decimal

bp = Blueprint("employees", __name__, url_prefix="/api/funcionarios")
store = EmployeeStore()

# ---------- helpers ----------
def _row(x: Employee):
    return {
        "id": x.id,
        "nome_completo": x.nome_completo,
        "cpf": x.cpf,
        "salario_base": f"{Decimal(x.salario_base):.2f}" if x.salario_base is not None else None,
    }

def _payload():
    """Validate the three editable fields; returns (nome_completo, cpf, salario_base)."""
    data = request.get_json(silent=True) or {}
    nome = str(data.get("nome_completo") or "").strip()
    cpf = str(data.get("cpf") or "").strip()
    raw_salary = data.get("salario_base")

    if not nome or not cpf or raw_salary in (None, ""):
        raise InvalidInput("Todos os campos são obrigatórios.")
    if isinstance(raw_salary, bool):
        raise InvalidInput("salario_base deve ser um número.")
    try:
        salary = to_decimal(raw_salary)
    except ValueError:
        raise InvalidInput("salario_base deve ser um número.")
    if not salary.is_finite() or salary < 0:
        raise InvalidInput("salario_base deve ser um valor não negativo.")
    return nome, cpf, salary.quantize(Decimal("0.01"))

# ---------- routes ----------
@bp.get("")
def list_employees():
    allowed = {
        "id": Employee.id,
        "nome_completo": Employee.nome_completo,
        "cpf": Employee.cpf,
        "salario_base": Employee.salario_base,
    }
    items = store.list(q=q_text(), sorts=sort_params(allowed))
    return ok([_row(x) for x in items], total=len(items))

@bp.get("/<int:emp_id>")
def get_employee(emp_id: int):
    return ok(_row(store.get(emp_id)))

@bp.post("")
def create_employee():
    nome, cpf, salary = _payload()
    return ok(_row(store.create(nome, cpf, salary)), status=201)

@bp.put("/<int:emp_id>")
def update_employee(emp_id: int):
    nome, cpf, salary = _payload()
    return ok(_row(store.update(emp_id, nome, cpf, salary)))

@bp.delete("/<int:emp_id>")
def delete_employee(emp_id: int):
    store.delete(emp_id)
    return "", 204
