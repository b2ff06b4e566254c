"""Tests for filmcheck.validation."""
