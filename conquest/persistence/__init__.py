"""Saving and loading game snapshots."""

from conquest.persistence.codec import SnapshotError, decode, encode, load_or_create, save_snapshot

__all__ = ["SnapshotError", "decode", "encode", "load_or_create", "save_snapshot"]
