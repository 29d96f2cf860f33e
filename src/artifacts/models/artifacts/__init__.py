"""Artifact record schemas."""
