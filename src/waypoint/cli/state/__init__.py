"""Inspect entity state machines and scaffold transition hooks."""
