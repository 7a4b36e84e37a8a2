from agent_lab.config import Settings
from agent_lab.db import engine_options
from agent_lab.services.pagination import PaginationConfig
from agent_lab.services.resources import default_pagination


def test_settings_leave_page_sizes_to_finalize(monkeypatch):
    monkeypatch.setenv("PAGINATION_DEFAULT_PAGE_SIZE", "abc")
    assert Settings().pagination == PaginationConfig()


def test_default_pagination_ignores_non_integer_env(monkeypatch):
    monkeypatch.setenv("PAGINATION_DEFAULT_PAGE_SIZE", "abc")
    monkeypatch.setenv("PAGINATION_MAX_PAGE_SIZE", "lots")
    config = default_pagination()
    assert config.default_page_size == 20
    assert config.max_page_size == 100


def test_default_pagination_applies_env_overrides(monkeypatch):
    monkeypatch.setenv("PAGINATION_DEFAULT_PAGE_SIZE", "10")
    monkeypatch.setenv("PAGINATION_MAX_PAGE_SIZE", "50")
    config = default_pagination()
    assert (config.default_page_size, config.max_page_size) == (10, 50)


def test_engine_options_skip_pool_sizing_for_sqlite():
    assert engine_options("sqlite://") == {}


def test_engine_options_size_server_pools():
    options = engine_options("postgresql+psycopg://u:p@localhost:5432/agent_lab")
    assert options["pool_pre_ping"] is True
    assert set(options) == {
        "pool_pre_ping",
        "pool_size",
        "max_overflow",
        "pool_timeout",
        "pool_recycle",
    }
