"""Tests for the asset copy pipeline."""
