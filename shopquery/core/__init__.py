"""Core query engine: domain model, predicates and operations."""
