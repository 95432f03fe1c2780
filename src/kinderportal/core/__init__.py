"""Data layer: models, schemas, database client and input validation."""
