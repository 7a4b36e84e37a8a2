import uuid

import pytest
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# SQLite has no schemas; attaching a second in-memory database named
# "public" lets the builder's "public.<table> <alias>" references resolve.
_SCHEMA = [
    """
    CREATE TABLE public.agents (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL UNIQUE,
        config TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE public.providers (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL UNIQUE,
        config TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE public.profiles (
        id TEXT PRIMARY KEY,
        workflow_name TEXT NOT NULL,
        name TEXT NOT NULL,
        description TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE public.profile_stages (
        profile_id TEXT NOT NULL,
        stage_name TEXT NOT NULL,
        agent_id TEXT,
        system_prompt TEXT,
        options TEXT,
        PRIMARY KEY (profile_id, stage_name)
    )
    """,
    """
    CREATE TABLE public.runs (
        id TEXT PRIMARY KEY,
        workflow_name TEXT NOT NULL,
        status TEXT NOT NULL,
        params TEXT,
        result TEXT,
        error_message TEXT,
        started_at TEXT,
        completed_at TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE public.stages (
        id TEXT PRIMARY KEY,
        run_id TEXT NOT NULL,
        node_name TEXT NOT NULL,
        iteration INTEGER NOT NULL,
        status TEXT NOT NULL,
        input_snapshot TEXT,
        output_snapshot TEXT,
        duration_ms INTEGER,
        error_message TEXT,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE public.decisions (
        id TEXT PRIMARY KEY,
        run_id TEXT NOT NULL,
        from_node TEXT NOT NULL,
        to_node TEXT NOT NULL,
        predicate_name TEXT,
        predicate_result INTEGER,
        reason TEXT,
        created_at TEXT NOT NULL
    )
    """,
]


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _attach_public(dbapi_connection, connection_record):
        dbapi_connection.execute("ATTACH DATABASE ':memory:' AS public")

    with engine.begin() as conn:
        for ddl in _SCHEMA:
            conn.execute(text(ddl))
    yield engine
    engine.dispose()


@pytest.fixture()
def db_session(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


def _insert(db_session, table: str, **values) -> dict:
    columns = ", ".join(values)
    binds = ", ".join(f":{key}" for key in values)
    db_session.execute(text(f"INSERT INTO public.{table} ({columns}) VALUES ({binds})"), values)
    db_session.commit()
    return values


@pytest.fixture()
def insert(db_session):
    def _factory(table: str, **values) -> dict:
        values.setdefault("id", str(uuid.uuid4()))
        return _insert(db_session, table, **values)

    return _factory


@pytest.fixture()
def agent_rows(insert):
    rows = []
    for i, name in enumerate(["gamma", "alpha", "beta"]):
        rows.append(
            insert(
                "agents",
                name=name,
                config="{}",
                created_at=f"2026-01-0{i + 1}T00:00:00",
                updated_at=f"2026-01-0{i + 1}T00:00:00",
            )
        )
    return rows


@pytest.fixture()
def profile_rows(db_session, insert):
    summarize = insert(
        "profiles",
        workflow_name="summarize",
        name="Summarize Default",
        description="baseline",
        created_at="2026-01-01T00:00:00",
        updated_at="2026-01-01T00:00:00",
    )
    reasoning = insert(
        "profiles",
        workflow_name="reasoning",
        name="Reasoning Default",
        description=None,
        created_at="2026-01-02T00:00:00",
        updated_at="2026-01-02T00:00:00",
    )
    for stage_name in ["summarize", "analyze"]:
        _insert(
            db_session,
            "profile_stages",
            profile_id=summarize["id"],
            stage_name=stage_name,
            agent_id=None,
            system_prompt=f"{stage_name} prompt",
            options=None,
        )
    return {"summarize": summarize, "reasoning": reasoning}
