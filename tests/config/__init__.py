"""Tests for filmcheck.config."""
