"""
Tests for adapter protocol, registry, mock, and tool adapters.
"""

import subprocess
from pathlib import Path
from unittest.mock import patch

from alterforge.adapters.base import ExecutionContext
from alterforge.adapters.containers.docker import DockerAdapter
from alterforge.adapters.languages.node import NodeAdapter, frontend_argv
from alterforge.adapters.mock import MockAdapter
from alterforge.adapters.registry import AdapterRegistry, default_registry
from alterforge.adapters.shell.command import COMMAND_NOT_FOUND, run_inherited
from alterforge.adapters.vcs.git import GitAdapter
from alterforge.core.models.action import Action, Receipt


def _ctx(adapter: str, working_dir: str = ".", **params) -> ExecutionContext:
    action = Action(id="op", adapter=adapter, params=params)
    return ExecutionContext(action=action, working_dir=working_dir, params=params)


def _completed(returncode: int = 0) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode)


# ── Protocol Tests ───────────────────────────────────────────────────


class TestExecutionContext:
    def test_defaults(self):
        ctx = ExecutionContext(action=Action(id="git-init", adapter="git"))
        assert ctx.working_dir == "."
        assert not ctx.dry_run
        assert ctx.params == {}

    def test_registry_passes_working_dir(self, tmp_path: Path):
        reg = AdapterRegistry()
        mock = MockAdapter()
        reg.set_mock_mode(True, mock)
        action = Action(id="npm-install:auth", adapter="node", params={"operation": "install"})
        reg.execute_action(action, working_dir=str(tmp_path))
        ctx = mock.call_log[0]
        assert ctx.working_dir == str(tmp_path)
        assert ctx.params == {"operation": "install"}


class TestReceipt:
    def test_exit_code_from_tool(self):
        r = Receipt.failure(adapter="docker", action_id="x", error="e", return_code=3)
        assert r.exit_code == 3

    def test_exit_code_fallback(self):
        assert Receipt.failure(adapter="a", action_id="x", error="e").exit_code == 1
        assert Receipt.success(adapter="a", action_id="x").exit_code == 0

    def test_skip(self):
        r = Receipt.skip(adapter="a", action_id="x", reason="nothing to do")
        assert not r.ok
        assert not r.failed
        assert r.output == "nothing to do"


# ── Mock Adapter Tests ───────────────────────────────────────────────


class TestMockAdapter:
    def test_default_success(self):
        mock = MockAdapter(adapter_name="test-mock")
        ctx = ExecutionContext(action=Action(id="op-1", adapter="test-mock"))
        receipt = mock.execute(ctx)
        assert receipt.ok
        assert receipt.return_code == 0
        assert mock.call_count == 1

    def test_custom_response(self):
        mock = MockAdapter()
        mock.set_response(
            "op-1",
            Receipt.success(adapter="mock", action_id="op-1", output="custom"),
        )
        ctx = ExecutionContext(action=Action(id="op-1", adapter="mock"))
        assert mock.execute(ctx).output == "custom"

    def test_set_failure(self):
        mock = MockAdapter()
        mock.set_failure("op-fail", error="Intentional failure", return_code=9)
        ctx = ExecutionContext(action=Action(id="op-fail", adapter="mock"))
        receipt = mock.execute(ctx)
        assert receipt.failed
        assert receipt.return_code == 9
        assert "Intentional failure" in receipt.error

    def test_action_ids(self):
        mock = MockAdapter()
        for i in range(3):
            mock.execute(ExecutionContext(action=Action(id=f"op-{i}", adapter="mock")))
        assert mock.action_ids == ["op-0", "op-1", "op-2"]

    def test_calls_for(self):
        mock = MockAdapter()
        mock.execute(ExecutionContext(action=Action(id="git-init", adapter="git")))
        mock.execute(ExecutionContext(action=Action(id="npm-install:a", adapter="node")))
        assert [c.action.id for c in mock.calls_for("node")] == ["npm-install:a"]

    def test_reset(self):
        mock = MockAdapter()
        mock.set_failure("op-1")
        mock.execute(ExecutionContext(action=Action(id="op-1", adapter="mock")))
        mock.reset()
        assert mock.call_count == 0
        assert mock.execute(ExecutionContext(action=Action(id="op-1", adapter="mock"))).ok

    def test_is_available(self):
        assert MockAdapter(available=True).is_available()
        assert not MockAdapter(available=False).is_available()


# ── Registry Tests ───────────────────────────────────────────────────


class TestAdapterRegistry:
    def test_register_replaces_same_name(self):
        reg = AdapterRegistry()
        reg.register(MockAdapter(adapter_name="git", available=False))
        reg.register(MockAdapter(adapter_name="git"))
        assert reg.adapter_status()["git"]["available"] is True

    def test_adapter_status(self):
        reg = AdapterRegistry()
        reg.register(MockAdapter(adapter_name="git", available=False))
        status = reg.adapter_status()
        assert status["git"]["available"] is False
        assert status["git"]["type"] == "MockAdapter"

    def test_mock_mode_default(self):
        reg = AdapterRegistry(mock_mode=True)
        receipt = reg.execute_action(Action(id="git-init", adapter="git"))
        assert receipt.ok
        assert receipt.metadata["mock"] is True

    def test_mock_mode_with_custom_mock(self):
        reg = AdapterRegistry()
        mock = MockAdapter()
        reg.set_mock_mode(True, mock)
        reg.execute_action(Action(id="compose-up", adapter="docker"))
        assert mock.action_ids == ["compose-up"]

    def test_missing_adapter_fails(self):
        receipt = AdapterRegistry().execute_action(Action(id="x", adapter="ghost"))
        assert receipt.failed
        assert "No adapter registered" in receipt.error

    def test_validation_failure(self):
        reg = AdapterRegistry()
        reg.register(GitAdapter())
        receipt = reg.execute_action(
            Action(id="git-commit", adapter="git", params={"operation": "commit"})
        )
        assert receipt.failed
        assert receipt.error.startswith("Validation failed:")

    def test_dry_run(self, tmp_path: Path):
        reg = AdapterRegistry()
        reg.register(GitAdapter())
        with patch("subprocess.run") as run:
            receipt = reg.execute_action(
                Action(id="git-init", adapter="git", params={"operation": "init"}),
                working_dir=str(tmp_path),
                dry_run=True,
            )
        assert receipt.status == "skipped"
        run.assert_not_called()

    def test_execute_adds_timing(self):
        reg = AdapterRegistry()
        reg.register(MockAdapter(adapter_name="git"))
        receipt = reg.execute_action(Action(id="git-init", adapter="git"))
        assert receipt.duration_ms >= 0

    def test_adapter_exception_becomes_failure(self):
        class Boom(MockAdapter):
            def execute(self, context):
                raise RuntimeError("kaboom")

        reg = AdapterRegistry()
        reg.register(Boom(adapter_name="git"))
        receipt = reg.execute_action(Action(id="git-init", adapter="git"))
        assert receipt.failed
        assert "kaboom" in receipt.error

    def test_default_registry(self):
        reg = default_registry()
        assert sorted(reg.adapter_status()) == ["docker", "git", "node"]
        assert not reg.mock_mode
        assert default_registry(mock_mode=True).mock_mode


# ── Process Runner Tests ─────────────────────────────────────────────


class TestRunInherited:
    def test_success(self, tmp_path: Path):
        with patch("subprocess.run", return_value=_completed(0)) as run:
            receipt = run_inherited("git", "x", ["echo", "hi"], cwd=str(tmp_path))
        assert receipt.ok
        assert receipt.return_code == 0
        run.assert_called_once_with(
            ["echo", "hi"], cwd=str(tmp_path), timeout=None, check=False
        )

    def test_non_zero(self, tmp_path: Path):
        with patch("subprocess.run", return_value=_completed(2)):
            receipt = run_inherited("git", "x", ["false"], cwd=str(tmp_path))
        assert receipt.failed
        assert receipt.return_code == 2
        assert receipt.exit_code == 2

    def test_command_not_found(self, tmp_path: Path):
        with patch("subprocess.run", side_effect=FileNotFoundError):
            receipt = run_inherited("node", "x", ["npx", "thing"], cwd=str(tmp_path))
        assert receipt.failed
        assert receipt.return_code == COMMAND_NOT_FOUND
        assert "npx" in receipt.error

    def test_timeout(self, tmp_path: Path):
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("npm", 5)):
            receipt = run_inherited("node", "x", ["npm"], cwd=str(tmp_path), timeout=5)
        assert receipt.failed
        assert "timed out after 5s" in receipt.error



# ── Git Adapter Tests ────────────────────────────────────────────────


class TestGitAdapter:
    def test_validate_unknown_operation(self):
        ok, err = GitAdapter().validate(_ctx("git", operation="push"))
        assert not ok
        assert "Unknown operation 'push'" in err

    def test_validate_commit_needs_message(self):
        assert not GitAdapter().validate(_ctx("git", operation="commit"))[0]
        assert GitAdapter().validate(_ctx("git", operation="commit", message="m"))[0]

    def test_argv(self, tmp_path: Path):
        cases = [
            ({"operation": "init"}, ["git", "init"]),
            ({"operation": "add", "paths": ["."]}, ["git", "add", "."]),
            ({"operation": "commit", "message": "hello"}, ["git", "commit", "-m", "hello"]),
        ]
        for params, expected in cases:
            with patch("subprocess.run", return_value=_completed(0)) as run:
                GitAdapter().execute(_ctx("git", working_dir=str(tmp_path), **params))
            assert run.call_args.args[0] == expected
            assert run.call_args.kwargs["cwd"] == str(tmp_path)


# ── Node Adapter Tests ───────────────────────────────────────────────


class TestNodeAdapter:
    def test_frontend_argv(self):
        assert frontend_argv("React", "shop-frontend") == [
            "npx",
            "create-react-app@latest",
            "shop-frontend",
        ]
        assert frontend_argv("Angular", "shop-frontend") == [
            "npx",
            "@angular/cli",
            "new",
            "shop-frontend",
            "--defaults",
            "--skip-git",
        ]

    def test_validate_unknown_framework(self):
        ok, err = NodeAdapter().validate(
            _ctx("node", operation="create-frontend", framework="Vue", app_name="x")
        )
        assert not ok
        assert "Unknown framework 'Vue'" in err

    def test_validate_missing_app_name(self):
        ok, _ = NodeAdapter().validate(
            _ctx("node", operation="create-frontend", framework="React")
        )
        assert not ok

    def test_validate_install_missing_dir(self, tmp_path: Path):
        ok, _ = NodeAdapter().validate(
            _ctx("node", working_dir=str(tmp_path / "gone"), operation="install")
        )
        assert not ok

    def test_install_detects_package_manager(self, tmp_path: Path):
        (tmp_path / "yarn.lock").write_text("")
        with patch("subprocess.run", return_value=_completed(0)) as run:
            NodeAdapter().execute(_ctx("node", working_dir=str(tmp_path), operation="install"))
        assert run.call_args.args[0] == ["yarn", "install"]

    def test_install_defaults_to_npm(self, tmp_path: Path):
        with patch("subprocess.run", return_value=_completed(0)) as run:
            NodeAdapter().execute(_ctx("node", working_dir=str(tmp_path), operation="install"))
        assert run.call_args.args[0] == ["npm", "install"]

    def test_create_frontend(self, tmp_path: Path):
        with patch("subprocess.run", return_value=_completed(0)) as run:
            NodeAdapter().execute(
                _ctx(
                    "node",
                    working_dir=str(tmp_path),
                    operation="create-frontend",
                    framework="React",
                    app_name="shop-frontend",
                )
            )
        assert run.call_args.args[0] == ["npx", "create-react-app@latest", "shop-frontend"]
        assert run.call_args.kwargs["cwd"] == str(tmp_path)


# ── Docker Adapter Tests ─────────────────────────────────────────────


class TestDockerAdapter:
    def test_validate(self):
        assert not DockerAdapter().validate(_ctx("docker", operation="down"))[0]
        assert not DockerAdapter().validate(_ctx("docker", operation="up"))[0]
        assert DockerAdapter().validate(
            _ctx("docker", operation="up", compose_file="docker/docker-compose.yml")
        )[0]

    def test_up_argv(self, tmp_path: Path):
        with patch("subprocess.run", return_value=_completed(0)) as run:
            DockerAdapter().execute(
                _ctx("docker", working_dir=str(tmp_path), operation="up", compose_file="c.yml")
            )
        assert run.call_args.args[0] == [
            "docker", "compose", "-f", "c.yml", "up", "-d", "--build",
        ]

    def test_up_foreground(self, tmp_path: Path):
        with patch("subprocess.run", return_value=_completed(0)) as run:
            DockerAdapter().execute(
                _ctx(
                    "docker",
                    working_dir=str(tmp_path),
                    operation="up",
                    compose_file="c.yml",
                    detach=False,
                    build=False,
                )
            )
        assert run.call_args.args[0] == ["docker", "compose", "-f", "c.yml", "up"]

    def test_build_argv(self, tmp_path: Path):
        with patch("subprocess.run", return_value=_completed(0)) as run:
            DockerAdapter().execute(
                _ctx("docker", working_dir=str(tmp_path), operation="build", compose_file="c.yml")
            )
        assert run.call_args.args[0] == ["docker", "compose", "-f", "c.yml", "build"]

    def test_failure_keeps_exit_code(self, tmp_path: Path):
        with patch("subprocess.run", return_value=_completed(17)):
            receipt = DockerAdapter().execute(
                _ctx("docker", working_dir=str(tmp_path), operation="build", compose_file="c.yml")
            )
        assert receipt.failed
        assert receipt.return_code == 17
