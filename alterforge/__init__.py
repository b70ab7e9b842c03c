"""alterforge — scaffold modular Node.js microservices with Docker and CI/CD."""

__version__ = "3.5.0"
