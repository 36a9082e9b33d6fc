"""Tests for the wireframe reader."""
