from castgraph.config import CastGraphConfig


def test_defaults():
    cfg = CastGraphConfig.load({})
    assert cfg.database.postgres_url.startswith("postgresql+psycopg://castgraph:")
    assert cfg.system.auto_migrate is True
    assert cfg.retry.retry_attempts == 3


def test_environment_overrides():
    cfg = CastGraphConfig.load(
        {
            "DATABASE_URL": "sqlite+aiosqlite:///cast.db",
            "RELATIONSHIP_ANALYST_MODEL": "openai/other",
            "CASTGRAPH_AUTO_MIGRATE": "false",
            "RETRY_ATTEMPTS": "5",
            "TEMPERATURE": "",
        }
    )
    assert cfg.database.postgres_url == "sqlite+aiosqlite:///cast.db"
    assert cfg.agents.relationship_analyst == "openai/other"
    assert cfg.system.auto_migrate is False
    assert cfg.retry.retry_attempts == 5
    assert cfg.llm.temperature is None
