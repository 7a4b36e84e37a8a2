"""Execution, pagination and read services built on the query layer."""
