"""Pydantic models for messages, consent records and gateway envelopes."""
