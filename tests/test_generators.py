"""
Tests for file generators — compose, CI workflow, Dockerfile, Node service files.
"""

import json

import yaml

from alterforge.core.models.service import Database, Feature, ServiceDescriptor
from alterforge.core.services.generators.dockerfile import generate_dockerfile
from alterforge.core.services.generators.github_workflow import generate_ci_cd
from alterforge.core.services.generators.lint_config import generate_lint_configs
from alterforge.core.services.generators.node_service import (
    generate_env,
    generate_index,
    generate_package_json,
)


def _descriptor(**overrides) -> ServiceDescriptor:
    data = {
        "name": "auth",
        "features": [Feature.SEQUELIZE, Feature.REST],
        "database": Database.POSTGRESQL,
        "port": 4321,
        "dependencies": {"express": "^4.18.2"},
        "dev_dependencies": {"nodemon": "^3.1.0"},
        "connection_string": "postgres://postgres:postgres@db:5432/microdb",
    }
    data.update(overrides)
    return ServiceDescriptor(**data)


# ═══════════════════════════════════════════════════════════════════
#  CI workflow
# ═══════════════════════════════════════════════════════════════════


class TestCiWorkflow:
    def test_path(self):
        assert generate_ci_cd().path == ".github/workflows/ci-cd.yml"

    def test_initial_matrix(self):
        assert "service: [core]" in generate_ci_cd().content

    def test_explicit_matrix(self):
        assert "service: [core, auth]" in generate_ci_cd(["core", "auth"]).content

    def test_parses_as_yaml(self):
        data = yaml.safe_load(generate_ci_cd().content)
        job = data["jobs"]["build"]
        assert job["strategy"]["matrix"]["service"] == ["core"]
        names = [step["name"] for step in job["steps"]]
        assert names == [
            "Checkout code",
            "Set up Node.js",
            "Install dependencies",
            "Run tests",
            "Build Docker image",
            "Login to GitHub Container Registry",
            "Push Docker image",
        ]

    def test_expressions_rendered(self):
        content = generate_ci_cd().content
        assert "cd services/${{ matrix.service }}" in content
        assert "ghcr.io/${{ github.repository_owner }}/${{ matrix.service }}:latest" in content

    def test_node_version_and_registry(self):
        content = generate_ci_cd(node_version="20", registry="registry.example.com").content
        assert "node-version: '20'" in content
        assert "registry: registry.example.com" in content


# ═══════════════════════════════════════════════════════════════════
#  Dockerfile
# ═══════════════════════════════════════════════════════════════════


class TestDockerfile:
    def test_exposes_port(self):
        f = generate_dockerfile(_descriptor())
        assert f.path == "Dockerfile"
        assert "EXPOSE 4321" in f.content
        assert f.content.startswith("FROM node:18\n")
        assert 'CMD ["npm", "start"]' in f.content

    def test_node_version(self):
        f = generate_dockerfile(_descriptor(), node_version="20-alpine")
        assert "FROM node:20-alpine" in f.content


# ═══════════════════════════════════════════════════════════════════
#  Node service files
# ═══════════════════════════════════════════════════════════════════


class TestNodeService:
    def test_package_json(self):
        f = generate_package_json(_descriptor())
        manifest = json.loads(f.content)
        assert manifest["name"] == "auth-service"
        assert manifest["version"] == "1.0.0"
        assert manifest["type"] == "module"
        assert manifest["scripts"]["start"] == "node src/index.js"
        assert manifest["scripts"]["dev"] == "nodemon src/index.js"
        assert manifest["dependencies"] == {"express": "^4.18.2"}
        assert manifest["devDependencies"] == {"nodemon": "^3.1.0"}

    def test_env(self):
        f = generate_env(_descriptor())
        assert f.path == ".env"
        assert f.content == (
            "PORT=4321\nDATABASE_URL=postgres://postgres:postgres@db:5432/microdb\n"
        )

    def test_env_without_database(self):
        f = generate_env(_descriptor(database=None, connection_string=""))
        assert f.content == "PORT=4321\nDATABASE_URL=\n"

    def test_index(self):
        f = generate_index(_descriptor())
        assert f.path == "src/index.js"
        assert "Hello from auth service!" in f.content
        assert "process.env.PORT || 4321" in f.content
        assert "${PORT}" in f.content


# ═══════════════════════════════════════════════════════════════════
#  Lint configs
# ═══════════════════════════════════════════════════════════════════


class TestLintConfigs:
    def test_files(self):
        files = generate_lint_configs()
        assert [f.path for f in files] == [".eslintrc.json", ".prettierrc"]

    def test_eslint(self):
        eslint = json.loads(generate_lint_configs()[0].content)
        assert eslint["extends"] == ["eslint:recommended"]
        assert eslint["parserOptions"]["sourceType"] == "module"

    def test_prettier(self):
        prettier = json.loads(generate_lint_configs()[1].content)
        assert prettier == {"semi": True, "singleQuote": True, "tabWidth": 2}
