"""Batch classification over a thread pool. Each transaction is independent."""

import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor

from swapclassifier.domain.models.swap import ParserResult
from swapclassifier.parser.pipeline import SwapClassifier
from swapclassifier.parser.utils.types import NormalizedTransaction

logger = logging.getLogger(__name__)


def classify_batch(
    classifier: SwapClassifier,
    transactions: Iterable[NormalizedTransaction | Mapping],
    max_workers: int = 8,
) -> list[ParserResult]:
    """Classify every transaction; results come back in input order."""
    items = list(transactions)
    if not items:
        return []
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(items)))) as pool:
        results = list(pool.map(classifier.classify, items))
    logger.info(
        "Classified batch of %d: %d swap(s), %d erased",
        len(results), sum(r.success for r in results), sum(not r.success for r in results),
    )
    return results


def classify_payload_batch(
    classifier: SwapClassifier,
    payloads: Iterable[Mapping],
    provider: str | None = None,
    max_workers: int = 8,
) -> list[ParserResult]:
    """Adapt and classify raw provider payloads; results come back in input order."""
    items = list(payloads)
    if not items:
        return []
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(items)))) as pool:
        return list(pool.map(lambda payload: classifier.classify_payload(payload, provider), items))
