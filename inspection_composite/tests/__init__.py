"""Tests for inspection_composite."""
