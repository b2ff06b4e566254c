"""Tests for filmcheck."""
