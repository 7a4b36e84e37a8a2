"""agent-lab: declarative SQL query construction for paged resource listings."""

__version__ = "0.1.0"
