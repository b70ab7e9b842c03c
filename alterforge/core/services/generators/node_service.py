"""
Node.js service generator — the files inside ``services/<name>/``.

Produces package.json, .env, the Express entrypoint and the optional
feature stubs (Sequelize connector, GraphQL schema, gRPC proto). All
paths are relative to the service directory.
"""

from __future__ import annotations

import json

from alterforge.core.models.service import ServiceDescriptor
from alterforge.core.models.template import GeneratedFile


# ── Feature stubs ───────────────────────────────────────────────


def generate_sequelize_connector() -> GeneratedFile:
    """ORM client built from the DATABASE_URL environment variable."""
    content = """\
import { Sequelize } from 'sequelize';
const sequelize = new Sequelize(process.env.DATABASE_URL);
export default sequelize;
"""
    return GeneratedFile(
        path="src/models/index.js",
        content=content,
        reason="Sequelize connector",
    )


def generate_graphql_schema(name: str) -> GeneratedFile:
    """Minimal schema with a single ``hello`` query."""
    content = f"""\
import {{ buildSchema }} from 'graphql';
export const schema = buildSchema(`
  type Query {{ hello: String }}
`);
export const root = {{ hello: () => 'Hello GraphQL from {name}' }};
"""
    return GeneratedFile(
        path="src/graphql/schema.js",
        content=content,
        reason="GraphQL schema stub",
    )


def generate_grpc_proto(name: str) -> GeneratedFile:
    """Proto with one unary RPC scoped to the service name."""
    content = f"""\
syntax = "proto3";
service {name}Service {{
  rpc SayHello (HelloRequest) returns (HelloReply);
}}
message HelloRequest {{ string name = 1; }}
message HelloReply {{ string message = 1; }}
"""
    return GeneratedFile(
        path="src/grpc/service.proto",
        content=content,
        reason="gRPC proto stub",
    )


# ── Service files ───────────────────────────────────────────────


def generate_package_json(service: ServiceDescriptor) -> GeneratedFile:
    manifest = {
        "name": f"{service.name}-service",
        "version": "1.0.0",
        "type": "module",
        "scripts": {"start": "node src/index.js", "dev": "nodemon src/index.js"},
        "dependencies": service.dependencies,
        "devDependencies": service.dev_dependencies,
    }
    return GeneratedFile(
        path="package.json",
        content=json.dumps(manifest, indent=2) + "\n",
        reason=f"npm manifest for {service.name}",
    )


def generate_env(service: ServiceDescriptor) -> GeneratedFile:
    return GeneratedFile(
        path=".env",
        content=f"PORT={service.port}\nDATABASE_URL={service.connection_string}\n",
        reason="Runtime environment",
    )


def generate_index(service: ServiceDescriptor) -> GeneratedFile:
    """Express hello-world entrypoint listening on the service port."""
    name, port = service.name, service.port
    content = f"""\
import express from 'express';
import dotenv from 'dotenv';
dotenv.config();
const app = express();

app.use(express.json());
app.get('/', (req, res) => res.send('Hello from {name} service!'));

const PORT = process.env.PORT || {port};
app.listen(PORT, () => console.log(`🚀 {name} running on port ${{PORT}}`));
"""
    return GeneratedFile(
        path="src/index.js",
        content=content,
        reason="Express entrypoint",
    )
