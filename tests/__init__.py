"""Test suite for the lounge relay.

Unit tests live under unit/, grouped by feature area (auth, identity,
store, state, websocket, messages, server), with shared in-memory fakes
in the helpers/ subpackage.
"""
