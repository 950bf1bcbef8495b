"""API middleware package (request IDs, error mapping)."""
