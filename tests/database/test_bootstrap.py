from pathlib import Path

from src.fitness_club.fitness_club.database.bootstrap import _strip_create_db_and_use, iter_sql_statements

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_split_ignores_semicolons_in_quotes_and_comments():
    sql = """
    -- header comment; with a semicolon
    INSERT INTO t (a) VALUES ('x;y');
    UPDATE t SET a = "b;c" WHERE id = 1; -- trailing
    SELECT 1
    """

    statements = list(iter_sql_statements(sql))

    assert statements == [
        "INSERT INTO t (a) VALUES ('x;y')",
        'UPDATE t SET a = "b;c" WHERE id = 1',
        "SELECT 1",
    ]


def test_schema_file_declares_visit_day_unique_key():
    sql = _strip_create_db_and_use((REPO_ROOT / "database" / "schema.sql").read_text(encoding="utf-8"))

    statements = list(iter_sql_statements(sql))

    assert len(statements) == 4
    assert all(s.upper().startswith("CREATE TABLE") for s in statements)
    visits = next(s for s in statements if "visits" in s.split("(")[0])
    assert "UNIQUE KEY uq_visits_day (client_id, subscription_id, visit_day, is_freeze_day)" in visits
