"""Business logic: taxonomy, capacity aggregation, validation, CRUD services."""
