# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: PortfolioHealthService.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, Optional

from api.schemas.health import DeepHealthResponse, HealthSummary
from config.Config import Config
from utility.logging_utils import get_class_logger
from vectorstore.PortfolioVectorStore import PortfolioVectorStore


@dataclass
class PortfolioHealthService:
    """
    Reports which backends the chat pipeline can use.
    A missing vector index is reported as "degraded", not "error".
    """

    cfg: Config
    store: Optional[PortfolioVectorStore] = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def deep_health(self) -> DeepHealthResponse:
        results: Dict[str, bool] = {
            "chat_credentials": self.cfg.has_chat_credentials,
            "vector_index": False,
        }
        details: Dict[str, Any] = {"config": self.cfg.summary()}

        if self.store is not None:
            results["vector_index"] = self.store.test_connection()
            if results["vector_index"]:
                try:
                    details["vector_records"] = self.store.count()
                except Exception as e:
                    self.logger.warning("Vector index answered the health check but count failed: %s", e)
                    results["vector_index"] = False
                    details["vector_error"] = str(e)

        if not results["chat_credentials"]:
            status = "error"
        elif not results["vector_index"]:
            status = "degraded"
        else:
            status = "ok"

        self.logger.info("Deep health: status=%s results=%s", status, results)

        return DeepHealthResponse(
            status=status,
            results=results,
            summary=HealthSummary(
                total=len(results),
                passed=sum(1 for ok in results.values() if ok),
                failed=sum(1 for ok in results.values() if not ok),
            ),
            details=details,
        )
