import logging
import os
import click
from flask import Flask
from flask_cors import CORS

from recibos_api.extensions import db, migrate, init_db
from recibos_api.common.errors import APIError, register_error_handlers
from recibos_api.models import load_all

__version__ = "1.0.0"


def create_app(config_object: str | None = None):
    app = Flask(__name__)

    # Absolute paths so the db file and scratch output don't depend on CWD
    project_root = os.path.dirname(app.root_path)

    # Basic inline config (defaults)
    app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(project_root, "database.db"),
    )
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["RECEIPTS_SCRATCH_DIR"] = os.getenv(
        "RECEIPTS_SCRATCH_DIR", os.path.join(project_root, "temp_files")
    )
    app.config["RECEIPT_TEMPLATE"] = os.getenv("RECEIPT_TEMPLATE", "recibo.html")
    app.config["LOG_LEVEL"] = os.getenv("LOG_LEVEL", "INFO")

    # Issuer printed on every receipt
    app.config["COMPANY_NAME"] = os.getenv("COMPANY_NAME", "Aliança Consig")
    app.config["COMPANY_CNPJ"] = os.getenv("COMPANY_CNPJ", "50.113.116/0001-05")
    app.config["COMPANY_CITY"] = os.getenv("COMPANY_CITY", "Brasília")

    # Try loading external config, but don't crash if missing
    if config_object:
        try:
            app.config.from_object(config_object)
        except Exception as e:
            app.logger.warning("Could not import config object %r: %s", config_object, e)

    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.logger.setLevel(app.config["LOG_LEVEL"])
    logging.getLogger("recibos_api").setLevel(app.config["LOG_LEVEL"])

    # CORS (dev)
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    # Extensions
    init_db(app)
    register_error_handlers(app)
    migrate.init_app(app, db)

    # Ensure models are loaded so metadata is complete
    with app.app_context():
        load_all()

    # Receipt rendering collaborators, shared by every request
    from recibos_api.services.company import CompanyInfo
    from recibos_api.services.receipt_renderer import ReceiptRenderer

    app.extensions["company"] = CompanyInfo.from_config(app.config)
    app.extensions["receipt_renderer"] = ReceiptRenderer(template_name=app.config["RECEIPT_TEMPLATE"])

    # Blueprints
    from recibos_api.blueprints.health import bp as health_bp
    from recibos_api.blueprints.employees import bp as employees_bp
    from recibos_api.blueprints.receipts import bp as receipts_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(employees_bp)
    app.register_blueprint(receipts_bp)

    # ----------------- CLI COMMANDS -----------------

    @app.cli.command("seed-demo")
    def seed_demo():
        """Insert a few demo employees (CPFs already on file are skipped)."""
        from decimal import Decimal
        from recibos_api.models.employee import Employee

        demo = [
            ("Ana Luíza Conceição", "111.222.333-44", Decimal("2500.00")),
            ("João da Silva", "222.333.444-55", Decimal("1412.00")),
            ("Márcia Gonçalves", "333.444.555-66", Decimal("4870.35")),
        ]
        created = 0
        for nome, cpf, salario in demo:
            if Employee.query.filter_by(cpf=cpf).first():
                continue
            db.session.add(Employee(nome_completo=nome, cpf=cpf, salario_base=salario))
            created += 1
        db.session.commit()
        click.echo(f"Seeded {created} demo employee(s).")

    @app.cli.command("gerar-recibos")
    @click.argument("periodo")
    def gerar_recibos(periodo):
        """Render the receipts of PERIODO (e.g. setembro/2025) into the scratch dir."""
        from recibos_api.blueprints.receipts import build_generator

        try:
            result = build_generator().generate(periodo)
        except APIError as e:
            raise click.ClickException(e.message)
        click.echo(
            f"{result.count} receipt(s) for {result.period.display}: "
            f"{os.path.join(app.config['RECEIPTS_SCRATCH_DIR'], result.archive)}"
        )

    app.logger.info("recibos_api initialised (db=%s)", app.config["SQLALCHEMY_DATABASE_URI"].split("://", 1)[0])
    return app
