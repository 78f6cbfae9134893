from unittest.mock import AsyncMock

from castgraph.models import AnalysisMethod, Relationship, RelationshipType
from castgraph.services import RelationshipGraphService


async def test_get_or_analyze_runs_keyword_path_once(store, roster, duel_scenes):
    service = RelationshipGraphService(store)

    first = await service.get_or_analyze("p1", roster, duel_scenes)
    second = await service.get_or_analyze("p1", roster, [])

    assert not first.reused
    assert first.batch.analysis_method is AnalysisMethod.KEYWORD
    assert first.batch.relationships[0].type is RelationshipType.ENEMIES
    assert second.reused
    assert second.batch.relationships == first.batch.relationships


async def test_ai_failure_persists_keyword_method(store, roster, duel_scenes):
    analyst = AsyncMock(side_effect=RuntimeError("boom"))
    service = RelationshipGraphService(store, analyst=analyst)

    result = await service.get_or_analyze("p1", roster, duel_scenes, use_ai=True)

    assert result.warning
    assert (await store.load("p1")).analysis_method is AnalysisMethod.KEYWORD


async def test_reanalyze_switches_method(store, roster, duel_scenes):
    analyst = AsyncMock(
        return_value=[{"character1": "Ana", "character2": "Ben", "type": "family", "strength": 0.6}]
    )
    service = RelationshipGraphService(store, analyst=analyst)
    await service.get_or_analyze("p1", roster, duel_scenes)

    result = await service.reanalyze("p1", roster, duel_scenes, use_ai=True)

    assert result.batch.analysis_method is AnalysisMethod.AI
    loaded = await store.load("p1")
    assert loaded.analysis_method is AnalysisMethod.AI
    assert loaded.relationships[0].type is RelationshipType.FAMILY
    analyst.assert_awaited_once()


async def test_save_external_and_clear(store):
    service = RelationshipGraphService(store)
    rel = Relationship(character1="Ana", character2="Ben", strength=0.3, scenes=[2])

    await service.save_external("p1", [rel], AnalysisMethod.AI)
    assert (await store.load("p1")).relationships == [rel]

    assert await service.clear("p1") == 1
    assert await store.load("p1") is None
