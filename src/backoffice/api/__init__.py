"""HTTP API: root router, health checks and shared dependencies."""
