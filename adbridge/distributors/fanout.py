"""Distribute one campaign to several platforms at once.

Each platform runs on its own worker; a failure on one platform never affects
the others. Results come back in the order the targets were given.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, List, Mapping, Optional

from adbridge.infra.settings import get_settings
from adbridge.infra.tracer import Tracer, guarded
from adbridge.integrations.errors import UNKNOWN_ERROR, VALIDATION_ERROR
from adbridge.models import DistributionResult, Platform, PlatformCampaignResult, ResultError, UnifiedCampaignData

from .base import CampaignDistributor, DistributionState
from .registry import DISTRIBUTORS, get_distributor


def distribute_all(
    data: UnifiedCampaignData,
    targets: Mapping[Any, Any],
    *,
    distributors: Optional[Mapping[Platform, CampaignDistributor]] = None,
    tracer: Optional[Tracer] = None,
    max_workers: Optional[int] = None,
) -> DistributionResult:
    """``targets`` maps platform -> credentials; ``distributors`` overrides per platform."""
    overrides = distributors or {}
    if tracer is not None:
        tracer = guarded(tracer)
    slots: List[Any] = []
    for key, credentials in targets.items():
        platform = Platform.parse(key)
        d = overrides.get(platform)
        if d is None and platform in DISTRIBUTORS:
            d = get_distributor(platform, tracer=tracer)
        slots.append((platform, d, credentials))

    if not slots:
        return DistributionResult(results=[])

    workers = max_workers or int(get_settings().get("distribution.max_parallel_platforms", 4))
    with ThreadPoolExecutor(max_workers=max(1, min(workers, len(slots)))) as pool:
        futures = [pool.submit(d.distribute, data, c) if d is not None else None for _, d, c in slots]
        results = [
            _collect(f, platform) if f is not None else _unsupported(platform)
            for f, (platform, _, _) in zip(futures, slots)
        ]

    if tracer is not None:
        summary: Dict[str, Any] = {r.platform.value: r.success for r in results}
        tracer.event("distribution.fanout", results=summary)
    return DistributionResult(results=results)


def _unsupported(platform: Platform) -> PlatformCampaignResult:
    return PlatformCampaignResult(
        platform=platform,
        success=False,
        error=ResultError(VALIDATION_ERROR, f"No campaign distributor for platform {platform.value!r}"),
        state=DistributionState.REJECTED.value,
    )


def _collect(future: Future, platform: Platform) -> PlatformCampaignResult:
    # a distributor override that raises only fails its own platform
    try:
        return future.result()
    except Exception as exc:
        return PlatformCampaignResult(
            platform=platform,
            success=False,
            error=ResultError(UNKNOWN_ERROR, str(exc) or type(exc).__name__, {"type": type(exc).__name__}),
            state=DistributionState.FAILED.value,
        )
