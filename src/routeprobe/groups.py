# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Execution of one domain group of probes."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from .models import ProbeResult, ProbeSpec
from .probe import HttpProbe

logger = logging.getLogger(__name__)


def run_group(
    group_name: str,
    specs: Sequence[ProbeSpec],
    base_url: str,
    *,
    probe: HttpProbe,
    concurrency: int = 1,
) -> list[ProbeResult]:
    """
    Run every probe of a group and return the results in declared order.

    A failing probe never stops the group. With `concurrency > 1` the probes
    fan out over a thread pool; each result is written back into its declared
    slot so callers see the same order either way.
    """
    specs = list(specs)
    logger.info("Running %s group (%d probes)", group_name, len(specs))
    if concurrency <= 1 or len(specs) <= 1:
        return [probe.execute(spec, base_url, group=group_name) for spec in specs]

    slots: list[ProbeResult | None] = [None] * len(specs)
    with ThreadPoolExecutor(max_workers=min(concurrency, len(specs))) as executor:
        future_to_index = {
            executor.submit(probe.execute, spec, base_url, group=group_name): index for index, spec in enumerate(specs)
        }
        for future, index in future_to_index.items():
            slots[index] = future.result()
    return [result for result in slots if result is not None]


__all__ = ["run_group"]
