"""Tests for filmcheck.client."""
