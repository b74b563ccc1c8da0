"""HTTP adapter: FastAPI routers, dependencies and error responses."""
