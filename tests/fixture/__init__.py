"""Tests for filmcheck.fixture."""
