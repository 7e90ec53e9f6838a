"""Test suite for upstage_adapter."""
