"""Tests for gitscript."""
