# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-18
# Description: test_portfolio_health_service.py
# -----------------------------------------------------------------------------
from config.Config import Config
from services.PortfolioHealthService import PortfolioHealthService

from conftest import InMemoryVectorStore


class CountFailsStore(InMemoryVectorStore):
    def count(self) -> int:
        raise RuntimeError("collection deleted mid-check")


def test_all_backends_ok(cfg):
    result = PortfolioHealthService(cfg=cfg, store=InMemoryVectorStore()).deep_health()

    assert result.status == "ok"
    assert result.details["vector_records"] == 0
    assert result.summary.failed == 0


def test_missing_chat_credentials_is_an_error():
    result = PortfolioHealthService(cfg=Config()).deep_health()
    assert result.status == "error"


def test_count_failure_reports_degraded_instead_of_raising(cfg):
    result = PortfolioHealthService(cfg=cfg, store=CountFailsStore()).deep_health()

    assert result.status == "degraded"
    assert result.results["vector_index"] is False
    assert "collection deleted" in result.details["vector_error"]
