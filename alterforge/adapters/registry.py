"""
Adapter registry — the only way the scaffolder reaches an external tool.

``scaffold_ops`` builds Actions ("git-init", "npm-install:auth",
"compose-up", …) and hands them to ``execute_action``; the registry picks
the adapter named by ``Action.adapter``, validates, runs and times the
call. In mock mode every Action goes to a single MockAdapter instead.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from alterforge.adapters.base import Adapter, ExecutionContext
from alterforge.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Adapters by tool name, plus mock-mode routing."""

    def __init__(self, mock_mode: bool = False):
        self._adapters: dict[str, Adapter] = {}
        self._mock_mode = mock_mode
        self._mock: Adapter | None = None

    @property
    def mock_mode(self) -> bool:
        return self._mock_mode

    def set_mock_mode(self, enabled: bool, mock_adapter: Adapter | None = None) -> None:
        """Route every Action to *mock_adapter* while *enabled*.

        Without a mock adapter, mock mode answers every Action with a
        success receipt and records nothing.
        """
        self._mock_mode = enabled
        self._mock = mock_adapter

    def register(self, adapter: Adapter) -> None:
        if adapter.name in self._adapters:
            logger.warning("Replacing adapter already registered as %s", adapter.name)
        self._adapters[adapter.name] = adapter
        logger.debug("Registered adapter: %s", adapter.name)

    def adapter_status(self) -> dict[str, dict[str, Any]]:
        """Which tools are on PATH, by adapter name."""
        status: dict[str, dict[str, Any]] = {}
        for name, adapter in self._adapters.items():
            try:
                available = adapter.is_available()
            except Exception:
                available = False
            status[name] = {
                "name": name,
                "available": available,
                "type": type(adapter).__name__,
            }
        return status

    # ── Dispatch ────────────────────────────────────────────────

    def _select(self, action: Action) -> Adapter | None:
        if self._mock_mode:
            return self._mock
        return self._adapters.get(action.adapter)

    def execute_action(
        self,
        action: Action,
        working_dir: str = ".",
        dry_run: bool = False,
    ) -> Receipt:
        """Run *action* and describe the outcome. Never raises.

        Args:
            action: What to run.
            working_dir: Directory the tool runs in.
            dry_run: Validate only; the Receipt is ``skipped``.
        """
        started = time.monotonic()
        context = ExecutionContext(
            action=action,
            working_dir=working_dir,
            dry_run=dry_run,
            params=action.params,
        )

        if self._mock_mode and self._mock is None:
            return Receipt.success(
                adapter=action.adapter,
                action_id=action.id,
                output=f"[mock] {action.adapter}:{action.id} executed",
                return_code=0,
                metadata={"mock": True, "dry_run": dry_run},
            )

        adapter = self._select(action)
        if adapter is None:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"No adapter registered for '{action.adapter}'",
            )

        try:
            valid, reason = adapter.validate(context)
        except Exception as e:
            valid, reason = False, f"error: {e}"
        if not valid:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Validation failed: {reason}",
            )

        if dry_run:
            return Receipt.skip(
                adapter=action.adapter,
                action_id=action.id,
                reason=f"[dry-run] Would execute {action.adapter}:{action.id}",
                metadata={"dry_run": True},
            )

        try:
            receipt = adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised on %s: %s", action.adapter, action.id, e)
            receipt = Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Unexpected error: {e}",
            )

        receipt.duration_ms = int((time.monotonic() - started) * 1000)
        if receipt.failed:
            logger.info("%s:%s failed: %s", action.adapter, action.id, receipt.error)
        return receipt


def default_registry(mock_mode: bool = False) -> AdapterRegistry:
    """Registry wired with the git, node and docker adapters."""
    from alterforge.adapters.containers.docker import DockerAdapter
    from alterforge.adapters.languages.node import NodeAdapter
    from alterforge.adapters.vcs.git import GitAdapter

    registry = AdapterRegistry(mock_mode=mock_mode)
    for adapter in (GitAdapter(), NodeAdapter(), DockerAdapter()):
        registry.register(adapter)
    return registry
