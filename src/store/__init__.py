"""Persistent registry store.

This package owns the relational schema, idempotent writes, and the
read queries behind the SDK.
"""
