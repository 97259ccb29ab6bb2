"""
Test fixtures for the Remote State Reconciler.

Contains sample API payloads for testing:
- sample_integration.json: Service integration as returned by GET (unwrapped)
- sample_schedules.json: Schedules listing for query "OnCallRotationA"
"""
