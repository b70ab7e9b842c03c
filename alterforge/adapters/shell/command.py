"""
Process runner shared by the git, node and docker adapters.

Scaffolding tools (npm, npx generators, docker compose) print progress
that the user should see as it happens, so output is not captured: the
child inherits stdout/stderr and only the exit status comes back.
"""

from __future__ import annotations

import logging
import subprocess
import time

from alterforge.core.models.action import Receipt

logger = logging.getLogger(__name__)

# Exit status reported when the executable cannot be found
COMMAND_NOT_FOUND = 127


def run_inherited(
    adapter: str,
    action_id: str,
    argv: list[str],
    *,
    cwd: str,
    timeout: int | None = None,
) -> Receipt:
    """Run *argv* in *cwd* with inherited streams and wrap the outcome."""
    logger.debug("Executing: %s (cwd=%s)", argv, cwd)
    start = time.monotonic()
    metadata = {"command": " ".join(argv), "cwd": cwd}

    try:
        result = subprocess.run(argv, cwd=cwd, timeout=timeout, check=False)
    except FileNotFoundError:
        return Receipt.failure(
            adapter=adapter,
            action_id=action_id,
            error=f"Command not found: {argv[0]}",
            return_code=COMMAND_NOT_FOUND,
            metadata=metadata,
        )
    except subprocess.TimeoutExpired:
        return Receipt.failure(
            adapter=adapter,
            action_id=action_id,
            error=f"Command timed out after {timeout}s",
            metadata=metadata,
        )
    except OSError as e:
        return Receipt.failure(
            adapter=adapter,
            action_id=action_id,
            error=f"Command execution error: {e}",
            metadata=metadata,
        )

    elapsed_ms = int((time.monotonic() - start) * 1000)
    if result.returncode == 0:
        return Receipt.success(
            adapter=adapter,
            action_id=action_id,
            duration_ms=elapsed_ms,
            return_code=0,
            metadata=metadata,
        )
    return Receipt.failure(
        adapter=adapter,
        action_id=action_id,
        error=f"Command exited with code {result.returncode}",
        duration_ms=elapsed_ms,
        return_code=result.returncode,
        metadata=metadata,
    )
