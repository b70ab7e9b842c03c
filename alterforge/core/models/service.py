"""
Service models — what a generated microservice is made of.

A ServiceDescriptor is built once from the user's selections, consumed
once to emit files, then discarded. The durable state of a service lives
only in the files generated from it.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from alterforge.core.models.template import GeneratedFile


class Feature(StrEnum):
    """Optional capability a service may include."""

    REST = "REST"
    SEQUELIZE = "Sequelize"
    GRAPHQL = "GraphQL"
    GRPC = "gRPC"


class Database(StrEnum):
    """Backing database kind for Sequelize services."""

    MYSQL = "MySQL"
    POSTGRESQL = "PostgreSQL"


class Frontend(StrEnum):
    """Frontend generator choice."""

    NONE = "None"
    REACT = "React"
    ANGULAR = "Angular"


class DatabaseProfile(BaseModel):
    """Fixed conventions for one database kind.

    ``image_token`` is what identifies the backing service in a compose
    document; ``service_name`` is the compose key application services
    put under ``depends_on``.
    """

    kind: Database
    service_name: str
    image: str
    image_token: str
    volume: str
    data_path: str
    port: int
    scheme: str
    user: str
    password: str
    database_name: str = "microdb"
    environment: dict[str, str] = Field(default_factory=dict)

    @property
    def connection_string(self) -> str:
        return (
            f"{self.scheme}://{self.user}:{self.password}"
            f"@{self.service_name}:{self.port}/{self.database_name}"
        )


DATABASE_PROFILES: dict[Database, DatabaseProfile] = {
    Database.MYSQL: DatabaseProfile(
        kind=Database.MYSQL,
        service_name="mysql",
        image="mysql:8",
        image_token="mysql:",
        volume="mysql_data",
        data_path="/var/lib/mysql",
        port=3306,
        scheme="mysql",
        user="root",
        password="root",
        environment={
            "MYSQL_ROOT_PASSWORD": "root",
            "MYSQL_DATABASE": "microdb",
            "MYSQL_USER": "root",
            "MYSQL_PASSWORD": "root",
        },
    ),
    Database.POSTGRESQL: DatabaseProfile(
        kind=Database.POSTGRESQL,
        service_name="db",
        image="postgres:15",
        image_token="postgres:",
        volume="db_data",
        data_path="/var/lib/postgresql/data",
        port=5432,
        scheme="postgres",
        user="postgres",
        password="postgres",
        environment={
            "POSTGRES_USER": "postgres",
            "POSTGRES_PASSWORD": "postgres",
            "POSTGRES_DB": "microdb",
        },
    ),
}


def database_profile(database: Database) -> DatabaseProfile:
    """Look up the fixed conventions for *database*."""
    return DATABASE_PROFILES[database]


class ResolvedFeatures(BaseModel):
    """Output of the feature resolver for one service.

    Attributes:
        dependencies:      package name → semver range (insertion ordered).
        dev_dependencies:  dev toolchain, feature independent.
        files:             extra files under the service directory.
        connection_string: DATABASE_URL value, empty without Sequelize.
        database:          the database actually used, None without Sequelize.
    """

    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)
    files: list[GeneratedFile] = Field(default_factory=list)
    connection_string: str = ""
    database: Database | None = None


class ServiceDescriptor(BaseModel):
    """Resolved configuration for one generated microservice."""

    name: str
    features: list[Feature] = Field(default_factory=list)
    database: Database | None = None
    port: int
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)
    connection_string: str = ""

    def has(self, feature: Feature) -> bool:
        """Whether *feature* was selected for this service."""
        return feature in self.features

    @property
    def database_service(self) -> str | None:
        """Compose service name this service depends on, if any."""
        if self.database is None:
            return None
        return database_profile(self.database).service_name
