"""
Unit tests for the Remote State Reconciler.

Test individual components in isolation:
- Error classifier (status -> kind mapping)
- Retry policy and controller (delays, window bound, non-retryable errors)
- Local state model (name-based access, remote write-back)
- HTTP client (envelopes, pagination, error surfacing)
- Reconcilers (lifecycle, importer, lookup) with a mocked remote client
- Resource types (validation, payload mapping)
"""
