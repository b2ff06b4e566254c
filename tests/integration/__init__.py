"""Tests for in-process acceptance runs against the fake service."""
