"""
Port allocator — one pseudo-random host port per new service.

Ports are drawn independently: nothing is persisted and nothing checks
for collisions with ports already handed out, so two services of the same
project can end up sharing a port.
"""

from __future__ import annotations

import random

DEFAULT_PORT_RANGE: tuple[int, int] = (3000, 6999)


def allocate_port(
    rng: random.Random | None = None,
    port_range: tuple[int, int] = DEFAULT_PORT_RANGE,
) -> int:
    """Draw a port uniformly from *port_range* (both ends inclusive)."""
    low, high = port_range
    return (rng or random).randint(low, high)
