"""Unit tests for RingCatalog web route modules.

Structure:
    tests/unit/web/
    ├── test_routes_products.py      # Product catalog routes
    ├── test_routes_health.py        # Health check route
    ├── test_dependencies.py         # Shared oracle / pipeline dependencies
    └── test_response_models.py      # Response serialization

Testing pattern:
    - Use FastAPI's TestClient against the application object
    - Swap the pricing pipeline through app.dependency_overrides
    - Test request/response validation
    - Test error handling
"""
