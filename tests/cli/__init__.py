"""Tests for filmcheck.cli."""
