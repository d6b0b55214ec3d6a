"""Tests for rbxproject."""
