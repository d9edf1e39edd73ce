from recibos_api.extensions import normalize_db_url


def test_render_style_urls_use_psycopg3():
    assert normalize_db_url("postgres://u:p@db:5432/recibos") == "postgresql+psycopg://u:p@db:5432/recibos"
    assert normalize_db_url("postgresql://u:p@db/recibos") == "postgresql+psycopg://u:p@db/recibos"


def test_other_urls_untouched():
    assert normalize_db_url("sqlite:///:memory:") == "sqlite:///:memory:"
    assert normalize_db_url("postgresql+psycopg://u@db/x") == "postgresql+psycopg://u@db/x"
    assert normalize_db_url("") == ""
