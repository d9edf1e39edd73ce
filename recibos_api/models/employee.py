from recibos_api.extensions import db

class Employee(db.Model):
    __tablename__ = "funcionarios"

    id = db.Column(db.Integer, primary_key=True)

    nome_completo = db.Column(db.String(255), nullable=False)
    cpf           = db.Column(db.String(20), nullable=False)   # national tax id, unique
    salario_base  = db.Column(db.Numeric(12, 2), nullable=False)

    __table_args__ = (
        db.UniqueConstraint("cpf", name="uq_funcionarios_cpf"),
        db.Index("ix_funcionarios_nome", "nome_completo"),
    )

    def __repr__(self):
        return f"<Employee {self.id} {self.nome_completo!r}>"
