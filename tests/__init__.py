"""Tests for the matchmaster application."""
