"""
Live acceptance tests for filmcheck.

These tests talk to a real Film Query service and a real Docker daemon:
- FILMCHECK_SERVICE__BASE_URL must point at a running service
- the service must read the database started by the session fixture
  (launch it with the variables printed by `filmcheck db up`), or its own
  database must hold the same 51 seed films

All tests are marked with @pytest.mark.live and excluded from default test runs.
Run with: pytest -m "live or docker"
"""
