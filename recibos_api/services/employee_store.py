from __future__ import annotations

import logging
from decimal import Decimal
from typing import List

from sqlalchemy import asc, desc, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from recibos_api.common.errors import DuplicateTaxId, NotFound, StoreFailure
from recibos_api.extensions import db
from recibos_api.models.employee import Employee

log = logging.getLogger(__name__)


class EmployeeStore:
    """
    CRUD over the ``funcionarios`` table. Engine errors never leave this
    class: unique violations become DuplicateTaxId, anything else
    StoreFailure.
    """

    def list(self, q: str | None = None, sorts=None) -> List[Employee]:
        try:
            qry = Employee.query
            if q:
                like = f"%{q}%"
                qry = qry.filter(or_(Employee.nome_completo.ilike(like), Employee.cpf.ilike(like)))
            for col, asc_order in sorts or []:
                qry = qry.order_by(asc(col) if asc_order else desc(col))
            if not sorts:
                qry = qry.order_by(asc(Employee.nome_completo))
            return qry.order_by(asc(Employee.id)).all()
        except SQLAlchemyError as e:
            log.exception("listing employees failed")
            raise StoreFailure("Erro interno ao buscar funcionários.") from e

    def get(self, emp_id: int) -> Employee:
        try:
            emp = db.session.get(Employee, emp_id)
        except SQLAlchemyError as e:
            log.exception("loading employee %s failed", emp_id)
            raise StoreFailure("Erro interno ao buscar funcionário.") from e
        if emp is None:
            raise NotFound("Funcionário não encontrado.")
        return emp

    def create(self, nome_completo: str, cpf: str, salario_base: Decimal) -> Employee:
        emp = Employee(nome_completo=nome_completo, cpf=cpf, salario_base=salario_base)
        db.session.add(emp)
        self._commit(f"Já existe um funcionário com o CPF {cpf}.")
        return emp

    def update(self, emp_id: int, nome_completo: str, cpf: str, salario_base: Decimal) -> Employee:
        emp = self.get(emp_id)
        emp.nome_completo = nome_completo
        emp.cpf = cpf
        emp.salario_base = salario_base
        self._commit(f"Já existe um funcionário com o CPF {cpf}.")
        return emp

    def delete(self, emp_id: int) -> None:
        emp = self.get(emp_id)
        db.session.delete(emp)
        self._commit()

    def _commit(self, duplicate_message: str | None = None):
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            if duplicate_message and _is_duplicate_cpf(e):
                raise DuplicateTaxId(duplicate_message) from e
            log.exception("employee write rejected by a constraint")
            raise StoreFailure("Erro interno ao gravar funcionário.") from e
        except SQLAlchemyError as e:
            db.session.rollback()
            log.exception("employee write failed")
            raise StoreFailure("Erro interno ao gravar funcionário.") from e


def _is_duplicate_cpf(e: IntegrityError) -> bool:
    """
    True only for a violation of the CPF unique constraint.
    Postgres names the constraint; SQLite reports "UNIQUE constraint failed: funcionarios.cpf".
    """
    msg = str(e.orig).lower()
    return "uq_funcionarios_cpf" in msg or ("unique" in msg and "cpf" in msg)
