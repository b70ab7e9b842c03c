"""
Dockerfile generator — one image per Node.js service.
"""

from __future__ import annotations

from alterforge.core.models.service import ServiceDescriptor
from alterforge.core.models.template import GeneratedFile


_NODE_DOCKERFILE = """\
FROM node:{node_version}
WORKDIR /usr/src/app
COPY package*.json ./
RUN npm install
COPY . .
EXPOSE {port}
CMD ["npm", "start"]
"""


def generate_dockerfile(
    service: ServiceDescriptor,
    *,
    node_version: str = "18",
) -> GeneratedFile:
    """Generate the service Dockerfile, exposing the service port.

    Args:
        service: Resolved service descriptor.
        node_version: Tag of the ``node`` base image.

    Returns:
        GeneratedFile at ``Dockerfile`` (relative to the service directory).
    """
    return GeneratedFile(
        path="Dockerfile",
        content=_NODE_DOCKERFILE.format(node_version=node_version, port=service.port),
        overwrite=False,
        reason=f"Dockerfile for {service.name} (node:{node_version})",
    )
