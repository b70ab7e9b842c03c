"""
Lint config generator — project-wide ESLint and Prettier settings.
"""

from __future__ import annotations

import json

from alterforge.core.models.template import GeneratedFile

_ESLINT = {
    "env": {"es2021": True, "node": True},
    "extends": ["eslint:recommended"],
    "parserOptions": {"ecmaVersion": 12, "sourceType": "module"},
    "rules": {},
}

_PRETTIER = {
    "semi": True,
    "singleQuote": True,
    "tabWidth": 2,
}


def generate_lint_configs() -> list[GeneratedFile]:
    """``.eslintrc.json`` and ``.prettierrc`` for the project root."""
    return [
        GeneratedFile(
            path=".eslintrc.json",
            content=json.dumps(_ESLINT, indent=2) + "\n",
            reason="ESLint configuration",
        ),
        GeneratedFile(
            path=".prettierrc",
            content=json.dumps(_PRETTIER, indent=2) + "\n",
            reason="Prettier configuration",
        ),
    ]
