"""Tests for the bundled PostgreSQL tools in dbmaint.tools"""

import pytest
from conftest import FakeSessions

from dbmaint import DBObject
from dbmaint.runner import generate_script
from dbmaint.tools import AnalyzeTool, ReindexTool, TruncateTool, VacuumStatistics, VacuumTool

ORDERS = DBObject("sales", "orders")


def script_for(tool, properties):
    settings = tool.create_tool_settings()
    settings.load_configuration(None, properties)
    return generate_script(tool, None, settings, FakeSessions())


@pytest.mark.unit
def test_vacuum_plain():
    assert script_for(VacuumTool(), {"objects": ["sales.orders"]}) == 'VACUUM "sales"."orders";\n'


@pytest.mark.unit
def test_vacuum_with_options():
    script = script_for(VacuumTool(), {"objects": ["orders"], "full": "true", "analyze": True})
    assert script == 'VACUUM (FULL, ANALYZE) "public"."orders";\n'


@pytest.mark.unit
def test_vacuum_is_statistics_capable():
    caps = VacuumTool().capabilities
    assert caps.produces_statistics
    assert not caps.run_in_separate_transaction
    assert not caps.needs_confirmation


@pytest.mark.unit
def test_vacuum_statistics_from_pg_stat(cursor):
    """Test vacuum statistics read tuple counts for the vacuumed table"""
    cursor.fetchone = lambda: (10, 2)
    session = FakeSessions(cursor)
    with session(None, ORDERS, "test") as s:
        stats = VacuumTool().get_execute_statistics(ORDERS, None, None, s, cursor)

    assert stats == [VacuumStatistics(relation="sales.orders", live_tuples=10, dead_tuples=2)]
    assert "pg_stat_user_tables" in cursor.executed[0]


@pytest.mark.unit
def test_vacuum_statistics_for_unknown_table(cursor):
    with FakeSessions(cursor)(None, ORDERS, "test") as s:
        stats = VacuumTool().get_execute_statistics(ORDERS, None, None, s, cursor)
    assert stats == [VacuumStatistics(relation="sales.orders")]


@pytest.mark.unit
def test_analyze():
    assert script_for(AnalyzeTool(), {"objects": "a,b", "verbose": "1"}) == (
        'ANALYZE (VERBOSE) "public"."a";\nANALYZE (VERBOSE) "public"."b";\n'
    )


@pytest.mark.unit
def test_reindex_includes_comment():
    script = script_for(ReindexTool(), {"objects": ["sales.orders"], "concurrently": "yes"})
    assert script == '-- Rebuild indexes of table sales.orders;\nREINDEX TABLE CONCURRENTLY "sales"."orders";\n'


@pytest.mark.unit
def test_reindex_index_and_schema():
    tool = ReindexTool()
    settings = tool.create_tool_settings()
    index_actions = tool.generate_object_queries(None, settings, DBObject("sales", "orders_pkey", "index"))
    schema_actions = tool.generate_object_queries(None, settings, DBObject("public", "sales", "schema"))

    assert index_actions[1].script == 'REINDEX INDEX "sales"."orders_pkey"'
    assert schema_actions[1].script == 'REINDEX SCHEMA "sales"'
    assert index_actions[0].is_comment


@pytest.mark.unit
def test_reindex_rejects_other_kinds():
    tool = ReindexTool()
    with pytest.raises(ValueError):
        tool.generate_object_queries(None, tool.create_tool_settings(), DBObject("public", "v", "view"))


@pytest.mark.unit
def test_truncate():
    script = script_for(TruncateTool(), {"objects": ["orders"], "restart_identity": "on", "cascade": "on"})
    assert script == 'TRUNCATE TABLE "public"."orders" RESTART IDENTITY CASCADE;\n'


@pytest.mark.unit
def test_truncate_capabilities():
    caps = TruncateTool().capabilities
    assert caps.needs_confirmation
    assert caps.run_in_separate_transaction
    assert not caps.produces_statistics
    assert not caps.open_target_objects_on_finish
