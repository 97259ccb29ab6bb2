"""
Integration tests for the Remote State Reconciler.

Test components together: real HTTPRemoteClient, retry controller and
reconcilers against an in-memory, eventually-consistent fake API served
through httpx.MockTransport. Time is driven by a fake clock.
"""
